# backend/customer_mgmt/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from customer_mgmt.api import customer_api
from customer_mgmt.config import load_settings
from customer_mgmt.core.log_config import configure_logging
from customer_mgmt.database import init_schema

settings = load_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    current = load_settings()
    if current.storage_backend == "mysql":
        init_schema()
    logger.info("Customer API started with %s storage", current.storage_backend)
    yield


app = FastAPI(title="Customer Management API", lifespan=lifespan)

# Add CORS middleware to allow the Streamlit UI to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
)

app.include_router(customer_api.router, prefix="/api")


@app.get("/")
async def read_root():
    return {"message": "Welcome to the Customer Management API!"}


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
