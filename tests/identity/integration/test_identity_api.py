"""Integration tests for customer accounts, staff administration and the customer directory."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from identity.api import (
    address_router,
    admin_auth_router,
    auth_router,
    customer_router,
    profile_router,
    wishlist_router,
    worker_router,
)
from identity.staff.management import add_staff
from shared.api import register_exception_handlers

ADDRESS = {
    "name": "Asha Rao",
    "address_line1": "12 MG Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "pincode": "560001",
    "country": "India",
}


@pytest.fixture()
def client():
    app = FastAPI()
    register_exception_handlers(app)
    for router in (
        auth_router,
        profile_router,
        address_router,
        wishlist_router,
        admin_auth_router,
        worker_router,
        customer_router,
    ):
        app.include_router(router)
    return TestClient(app)


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


class TestCustomerAuth:
    def test_register_then_login(self, client):
        registered = client.post(
            "/api/auth/register", json={"name": "Asha Rao", "email": "asha@example.com", "password": "s3cret-pass"}
        )
        assert registered.status_code == 201
        assert "password_hash" not in registered.json()["user"]

        login = client.post("/api/auth/login", json={"email": "asha@example.com", "password": "s3cret-pass"})

        assert login.status_code == 200
        assert login.json()["token_type"] == "bearer"
        profile = client.get("/api/user/profile", headers=_bearer(login.json()["token"]))
        assert profile.json()["user"]["email"] == "asha@example.com"

    def test_duplicate_registration_is_400(self, client, customer_user):
        response = client.post(
            "/api/auth/register", json={"name": "Asha", "email": "asha@example.com", "password": "pw"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "User with this email already exists"

    def test_wrong_password_is_401(self, client, customer_user):
        response = client.post("/api/auth/login", json={"email": "asha@example.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid email or password"

    def test_profile_requires_customer_token(self, client, admin_headers):
        assert client.get("/api/user/profile").status_code == 401
        assert client.get("/api/user/profile", headers=admin_headers).status_code == 401

    def test_update_profile(self, client, customer_headers):
        response = client.put("/api/user/profile", json={"name": "Asha R"}, headers=customer_headers)

        assert response.json()["user"]["name"] == "Asha R"

    @pytest.mark.parametrize("body", [{"name": 42}, {"name": None}, {"phone": ["98765"]}])
    def test_malformed_profile_update_is_400(self, client, customer_headers, body):
        response = client.put("/api/user/profile", json=body, headers=customer_headers)

        assert response.status_code == 400
        assert list(response.json()["errors"]) == list(body)


class TestAddressesAndWishlist:
    def test_address_lifecycle(self, client, customer_headers):
        created = client.post("/api/addresses", json={**ADDRESS, "is_default": True}, headers=customer_headers)
        assert created.status_code == 201
        address_id = created.json()["address"]["id"]

        updated = client.put(f"/api/addresses/{address_id}", json={"city": "Mysuru"}, headers=customer_headers)
        assert updated.json()["address"]["city"] == "Mysuru"

        deleted = client.delete(f"/api/addresses/{address_id}", headers=customer_headers)
        assert deleted.json() == {"success": True, "message": "Address deleted successfully"}
        assert client.get("/api/addresses", headers=customer_headers).json()["addresses"] == []

    def test_missing_address_fields_is_400(self, client, customer_headers):
        response = client.post("/api/addresses", json={"name": "Asha"}, headers=customer_headers)

        assert response.status_code == 400
        assert set(response.json()["errors"]) == {"address_line1", "city", "state", "pincode", "country"}

    def test_wishlist(self, client, customer_headers):
        client.post("/api/wishlist", json={"product_id": "va-01"}, headers=customer_headers)
        client.post("/api/wishlist", json={"product_id": "va-01"}, headers=customer_headers)
        assert len(client.get("/api/wishlist", headers=customer_headers).json()["items"]) == 1

        client.delete("/api/wishlist", params={"product_id": "va-01"}, headers=customer_headers)
        assert client.get("/api/wishlist", headers=customer_headers).json()["items"] == []


class TestStaffAuth:
    def test_bootstrap_then_login_and_me(self, client):
        bootstrap = client.post(
            "/api/admin/bootstrap", json={"username": "priya", "name": "Priya", "password": "owner-pass"}
        )
        assert bootstrap.status_code == 201
        assert bootstrap.json()["user"]["role"] == "superadmin"

        login = client.post("/api/admin/login", json={"username": "priya", "password": "owner-pass"})
        me = client.get("/api/admin/me", headers=_bearer(login.json()["token"]))

        assert me.json()["user"] == {"username": "priya", "role": "superadmin", "name": "Priya", "email": None}

    def test_second_bootstrap_is_409(self, client, session):
        add_staff(session, {"username": "priya", "name": "Priya", "role": "superadmin", "password": "pw"})

        response = client.post("/api/admin/bootstrap", json={"username": "evil", "name": "Evil", "password": "pw"})

        assert response.status_code == 409

    def test_bad_staff_login_is_401(self, client):
        response = client.post("/api/admin/login", json={"username": "ghost", "password": "pw"})

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid username or password"


class TestWorkerAdministration:
    def test_superuser_manages_workers(self, client, superadmin_headers):
        created = client.post(
            "/api/admin/workers",
            json={"username": "meera", "name": "Meera", "role": "worker", "password": "packing-pass"},
            headers=superadmin_headers,
        )
        assert created.status_code == 201
        assert created.json()["worker"]["username"] == "meera"

        updated = client.put("/api/admin/workers/meera", json={"role": "admin"}, headers=superadmin_headers)
        assert updated.json()["worker"]["role"] == "admin"

        workers = client.get("/api/admin/workers", headers=superadmin_headers).json()["workers"]
        assert [worker["username"] for worker in workers] == ["meera"]

        deleted = client.delete("/api/admin/workers/meera", headers=superadmin_headers)
        assert deleted.json()["message"] == "Worker deleted successfully"

    @pytest.mark.parametrize(
        "body",
        [
            {"username": "ravi", "name": "Ravi", "role": "owner", "password": "pw"},
            {"username": "ravi", "name": "Ravi", "role": "worker"},
            {"username": 7, "name": "Ravi", "role": "worker", "password": "pw"},
        ],
    )
    def test_malformed_worker_is_400(self, client, superadmin_headers, body):
        response = client.post("/api/admin/workers", json=body, headers=superadmin_headers)

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_admin_cannot_manage_workers(self, client, admin_headers):
        response = client.get("/api/admin/workers", headers=admin_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "Unauthorized: Only superusers can perform this action"

    def test_superuser_cannot_delete_self(self, client, superadmin_headers):
        response = client.delete("/api/admin/workers/priya", headers=superadmin_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "You cannot delete yourself"


class TestCustomerDirectoryEndpoint:
    def test_admin_lists_customers(self, client, admin_headers, customer_user):
        customers = client.get("/api/admin/customers", headers=admin_headers).json()["customers"]

        assert [row["email"] for row in customers] == ["asha@example.com"]
        assert customers[0]["total_orders"] == 0

    def test_worker_is_forbidden(self, client, worker_headers):
        assert client.get("/api/admin/customers", headers=worker_headers).status_code == 403
