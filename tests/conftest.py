import pytest
from fastapi.testclient import TestClient

from customer_mgmt.dependencies import get_customer_repository
from customer_mgmt.main import app
from customer_mgmt.repositories.customer_repository import InMemoryCustomerRepository


@pytest.fixture()
def repo():
    return InMemoryCustomerRepository()


@pytest.fixture()
def client(repo, monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    app.dependency_overrides[get_customer_repository] = lambda: repo
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def ann():
    return {
        "name": "Ann Lee",
        "address": "1 Main St",
        "phoneNo": "555-1234",
        "email": "ann@example.com",
    }
