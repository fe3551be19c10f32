import pytest

from customer_mgmt.dependencies import get_customer_repository
from customer_mgmt.main import app
from customer_mgmt.models.customer import Customer
from customer_mgmt.repositories.customer_repository import InMemoryCustomerRepository

STATUSES = ["Not Verified", "Verified", "Fraud", "Suspicious", "Black Listed"]


def create(client, payload):
    response = client.post("/api/customers", json=payload)
    assert response.status_code == 201
    return response.json()


# ---- SCENARIO ----
def test_create_status_change_delete_scenario(client, ann):
    response = client.post("/api/customers", json=ann)
    assert response.status_code == 201
    customer = response.json()
    customer_id = customer["id"]
    assert isinstance(customer_id, int) and customer_id > 0
    assert customer["verificationStatus"] == "Not Verified"

    response = client.patch(f"/api/customers/{customer_id}/status", json={"status": "Fraud"})
    assert response.status_code == 200

    response = client.get(f"/api/customers/{customer_id}")
    assert response.status_code == 200
    fetched = response.json()
    assert fetched["verificationStatus"] == "Fraud"
    for field in ("name", "address", "phoneNo", "email"):
        assert fetched[field] == ann[field]

    response = client.delete(f"/api/customers/{customer_id}")
    assert response.status_code == 204
    assert response.content == b""

    response = client.get(f"/api/customers/{customer_id}")
    assert response.status_code == 404


# ---- CREATE / READ ----
def test_create_assigns_fresh_ids_and_ignores_client_id(client, ann):
    first = create(client, {**ann, "id": 99})
    second = create(client, {**ann, "name": "Bob Ray"})
    assert first["id"] != 99
    assert first["id"] != second["id"]

    client.delete(f"/api/customers/{second['id']}")
    third = create(client, {**ann, "name": "Cy Twombly"})
    assert third["id"] not in (first["id"], second["id"])


def test_create_keeps_explicit_status(client, ann):
    customer = create(client, {**ann, "verificationStatus": "Verified"})
    assert customer["verificationStatus"] == "Verified"


@pytest.mark.parametrize("override", [
    {"name": "A"},
    {"name": ""},
    {"address": ""},
    {"phoneNo": "555-CALL"},
    {"email": "not-an-email"},
    {"verificationStatus": "Trusted"},
    {"name": "  "},
    {"name": " A "},
    {"address": "   "},
    {"phoneNo": "   "},
    {"phoneNo": "+ - +"},
])
def test_create_rejects_malformed_payload(client, ann, override):
    response = client.post("/api/customers", json={**ann, **override})
    assert response.status_code == 422


def test_create_requires_every_field(client, ann):
    payload = dict(ann)
    del payload["address"]
    assert client.post("/api/customers", json=payload).status_code == 422


def test_list_returns_all_in_insertion_order(client, ann):
    assert client.get("/api/customers").json() == []
    ids = [create(client, {**ann, "name": name})["id"] for name in ("Ann Lee", "Bo Diddley", "Cleo Laine")]
    response = client.get("/api/customers")
    assert response.status_code == 200
    assert [c["id"] for c in response.json()] == ids


def test_get_never_issued_id_is_not_found(client):
    response = client.get("/api/customers/4242")
    assert response.status_code == 404


def test_statuses_endpoint_lists_enumeration(client):
    response = client.get("/api/customers/statuses")
    assert response.status_code == 200
    assert response.json() == STATUSES


# ---- FULL UPDATE ----
def test_full_update_overwrites_fields_but_not_status(client, ann):
    customer = create(client, ann)
    client.patch(f"/api/customers/{customer['id']}/status", json={"status": "Suspicious"})

    payload = {
        "name": "Ann Lee-Smith",
        "address": "2 High St",
        "phoneNo": "+1 555 0000",
        "email": "ann.smith@example.com",
        "verificationStatus": "Verified",
    }
    response = client.put(f"/api/customers/{customer['id']}", json=payload)
    assert response.status_code == 200
    updated = response.json()
    assert updated["id"] == customer["id"]
    assert updated["name"] == "Ann Lee-Smith"
    assert updated["address"] == "2 High St"
    assert updated["phoneNo"] == "+1 555 0000"
    assert updated["email"] == "ann.smith@example.com"
    assert updated["verificationStatus"] == "Suspicious"


def test_full_update_unknown_id_is_not_found(client, ann):
    assert client.put("/api/customers/77", json=ann).status_code == 404


# ---- PARTIAL UPDATE ----
def test_partial_update_only_touches_given_fields(client, ann):
    customer = create(client, ann)
    response = client.patch(f"/api/customers/{customer['id']}", json={"address": "X"})
    assert response.status_code == 200
    patched = response.json()
    assert patched["address"] == "X"
    for field in ("name", "phoneNo", "email", "verificationStatus"):
        assert patched[field] == customer[field]


def test_partial_update_ignores_null_fields(client, ann):
    customer = create(client, ann)
    response = client.patch(f"/api/customers/{customer['id']}", json={"name": None, "email": "new@example.com"})
    assert response.status_code == 200
    assert response.json()["name"] == "Ann Lee"
    assert response.json()["email"] == "new@example.com"


@pytest.mark.parametrize("fields", [{"name": "  "}, {"address": "   "}, {"phoneNo": " - "}])
def test_partial_update_rejects_blank_values(client, ann, fields):
    customer = create(client, ann)
    response = client.patch(f"/api/customers/{customer['id']}", json=fields)
    assert response.status_code == 422
    assert client.get(f"/api/customers/{customer['id']}").json() == customer


def test_create_strips_surrounding_whitespace(client, ann):
    customer = create(client, {**ann, "name": "  Ann Lee ", "phoneNo": " 555-1234 "})
    assert customer["name"] == "Ann Lee"
    assert customer["phoneNo"] == "555-1234"


def test_partial_update_unknown_id_is_not_found(client):
    assert client.patch("/api/customers/31", json={"address": "X"}).status_code == 404


# ---- STATUS ----
@pytest.mark.parametrize("status", STATUSES)
def test_status_update_to_every_value(client, ann, status):
    customer = create(client, ann)
    response = client.patch(f"/api/customers/{customer['id']}/status", json={"status": status})
    assert response.status_code == 200
    assert response.json()["verificationStatus"] == status
    assert client.get(f"/api/customers/{customer['id']}").json()["verificationStatus"] == status


def test_status_update_to_same_value_is_accepted(client, ann):
    customer = create(client, ann)
    response = client.patch(f"/api/customers/{customer['id']}/status", json={"status": "Not Verified"})
    assert response.status_code == 200


def test_status_update_rejects_unknown_value(client, ann):
    customer = create(client, ann)
    response = client.patch(f"/api/customers/{customer['id']}/status", json={"status": "Trusted"})
    assert response.status_code == 422
    assert client.get(f"/api/customers/{customer['id']}").json()["verificationStatus"] == "Not Verified"


def test_status_update_unknown_id_is_not_found(client):
    response = client.patch("/api/customers/5/status", json={"status": "Fraud"})
    assert response.status_code == 404


# ---- DELETE ----
def test_delete_unknown_id_is_not_found(client, ann):
    customer = create(client, ann)
    assert client.delete(f"/api/customers/{customer['id']}").status_code == 204
    assert client.delete(f"/api/customers/{customer['id']}").status_code == 404


# ---- FAULTS ----
class BrokenRepository(InMemoryCustomerRepository):
    def find_all(self):
        raise RuntimeError("storage down")

    def find_by_id(self, customer_id):
        raise RuntimeError("storage down")

    def exists_by_id(self, customer_id):
        raise RuntimeError("storage down")


@pytest.mark.parametrize("method,path,body", [
    ("GET", "/api/customers", None),
    ("GET", "/api/customers/1", None),
    ("PUT", "/api/customers/1", {"name": "Ann Lee", "address": "1 Main St", "phoneNo": "555", "email": "a@example.com"}),
    ("PATCH", "/api/customers/1", {"address": "X"}),
    ("PATCH", "/api/customers/1/status", {"status": "Fraud"}),
    ("DELETE", "/api/customers/1", None),
])
def test_storage_fault_maps_to_server_error(client, method, path, body):
    app.dependency_overrides[get_customer_repository] = lambda: BrokenRepository()
    response = client.request(method, path, json=body)
    assert response.status_code == 500


def test_create_storage_fault_maps_to_server_error(client, ann):
    class FailingSave(InMemoryCustomerRepository):
        def save(self, customer):
            raise RuntimeError("disk full")

    app.dependency_overrides[get_customer_repository] = lambda: FailingSave()
    assert client.post("/api/customers", json=ann).status_code == 500


# ---- MISC ----
def test_health_and_root(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert "message" in client.get("/").json()


def test_cors_allows_streamlit_origin(client):
    response = client.options(
        "/api/customers",
        headers={"Origin": "http://localhost:8501", "Access-Control-Request-Method": "PATCH"},
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:8501"


class VanishingRepository(InMemoryCustomerRepository):
    """Row is found on read but deleted by someone else before the write lands."""

    def save(self, customer):
        if customer.id is not None:
            self.delete_by_id(customer.id)
        return super().save(customer)


@pytest.mark.parametrize("method,suffix,body", [
    ("PUT", "", {"name": "Ann Lee", "address": "1 Main St", "phoneNo": "555", "email": "a@example.com"}),
    ("PATCH", "", {"address": "X"}),
    ("PATCH", "/status", {"status": "Fraud"}),
])
def test_write_to_concurrently_deleted_row_is_not_found(client, ann, method, suffix, body):
    repo = VanishingRepository()
    customer = repo.save(Customer(**ann))
    app.dependency_overrides[get_customer_repository] = lambda: repo
    response = client.request(method, f"/api/customers/{customer.id}{suffix}", json=body)
    assert response.status_code == 404
