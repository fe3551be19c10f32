# backend/customer_mgmt/config.py
import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv

# Pick up a .env file from the working directory, if there is one
load_dotenv()

DEFAULT_CORS_ORIGINS = "http://localhost:8501,http://127.0.0.1:8501"


@dataclass(frozen=True)
class Settings:
    storage_backend: str
    mysql_host: str
    mysql_port: int
    mysql_user: str
    mysql_password: str
    mysql_database: str
    cors_origins: Tuple[str, ...]
    log_level: str


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def load_settings() -> Settings:
    """Read settings from the environment on every call so tests can monkeypatch it."""
    origins = _getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return Settings(
        storage_backend=_getenv("STORAGE_BACKEND", "mysql").lower(),
        mysql_host=_getenv("MYSQL_HOST", "127.0.0.1"),
        mysql_port=int(_getenv("MYSQL_PORT", "3306")),
        mysql_user=_getenv("MYSQL_USER", "app_user"),
        mysql_password=_getenv("MYSQL_PASSWORD", "changeme123"),
        mysql_database=_getenv("MYSQL_DATABASE", "customer_management"),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        log_level=_getenv("LOG_LEVEL", "INFO").upper(),
    )
