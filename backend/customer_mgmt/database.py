import logging
from typing import Dict, Any, Optional

import mysql.connector

from customer_mgmt.config import Settings, load_settings

logger = logging.getLogger(__name__)

CUSTOMER_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS customer (
    id BIGINT AUTO_INCREMENT PRIMARY KEY,
    name VARCHAR(255) NOT NULL,
    address TEXT NOT NULL,
    phone_no VARCHAR(64) NOT NULL,
    email VARCHAR(255) NOT NULL,
    verification_status VARCHAR(32) NOT NULL DEFAULT 'Not Verified'
)
"""


def get_db_config(settings: Optional[Settings] = None) -> Dict[str, Any]:
    """Get database configuration from environment variables"""
    settings = settings or load_settings()
    return {
        "host": settings.mysql_host,
        "port": settings.mysql_port,
        "user": settings.mysql_user,
        "password": settings.mysql_password,
        "database": settings.mysql_database,
        "charset": "utf8mb4",
        "collation": "utf8mb4_unicode_ci",
        "autocommit": False,
    }


def get_db_connection():
    """Get a database connection using environment configuration"""
    try:
        return mysql.connector.connect(**get_db_config())
    except mysql.connector.Error as err:
        logger.error("Database connection error: %s", err)
        raise


def init_schema() -> None:
    """Create the customer table if it does not exist yet."""
    conn = get_db_connection()
    cursor = conn.cursor()
    try:
        cursor.execute(CUSTOMER_TABLE_DDL)
        conn.commit()
        logger.info("customer table ready")
    finally:
        cursor.close()
        conn.close()
