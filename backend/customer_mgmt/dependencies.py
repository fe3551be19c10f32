# backend/customer_mgmt/dependencies.py

from functools import lru_cache

from fastapi import Depends

from customer_mgmt.config import load_settings
from customer_mgmt.repositories.customer_repository import (
    CustomerRepository,
    InMemoryCustomerRepository,
    MySQLCustomerRepository,
)
from customer_mgmt.services.customer_service import CustomerService


@lru_cache(maxsize=None)
def _repository_for(backend: str) -> CustomerRepository:
    if backend == "memory":
        return InMemoryCustomerRepository()
    if backend == "mysql":
        return MySQLCustomerRepository()
    raise ValueError(f"Unknown STORAGE_BACKEND '{backend}' (expected 'mysql' or 'memory')")


def get_customer_repository() -> CustomerRepository:
    # One repository per backend name, so the in-memory store survives across requests
    return _repository_for(load_settings().storage_backend)


def get_customer_service(repository: CustomerRepository = Depends(get_customer_repository)) -> CustomerService:
    return CustomerService(repository)
