"""Integration tests for Identity API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from identity.api import router
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(router)
    register_exception_handlers(app)
    return TestClient(app)


def _as(user_id, role="Customer"):
    return {"X-User-Id": user_id, "X-User-Role": role}


def _register(client, email="wanjiru@example.com"):
    response = client.post(
        "/users",
        json={"email": email, "first_name": "Wanjiru", "last_name": "Kamau"},
    )
    assert response.status_code == 201
    return response.json()["user_id"]


def _add_address(client, user_id, street="12 Moi Avenue", **extra):
    body = {"first_name": "Wanjiru", "last_name": "Kamau", "street": street, "city": "Nairobi", **extra}
    response = client.post("/users/me/addresses", json=body, headers=_as(user_id))
    assert response.status_code == 201
    return response.json()["address_id"]


class TestRegistrationAndProfile:
    def test_register_and_fetch_me(self, client):
        user_id = _register(client)
        response = client.get("/users/me", headers=_as(user_id))
        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "wanjiru@example.com"
        assert data["role"] == "Customer"
        assert data["addresses"] == []

    def test_me_requires_authentication(self, client):
        assert client.get("/users/me").status_code == 401

    def test_unknown_role_header_is_rejected(self, client):
        assert client.get("/users/me", headers=_as("u-1", role="Pirate")).status_code == 401

    def test_invalid_email_returns_400(self, client):
        response = client.post("/users", json={"email": "bad", "first_name": "A", "last_name": "B"})
        assert response.status_code == 400

    def test_update_profile(self, client):
        user_id = _register(client)
        response = client.put("/users/me/profile", json={"first_name": "Njeri"}, headers=_as(user_id))
        assert response.status_code == 200
        assert client.get("/users/me", headers=_as(user_id)).json()["first_name"] == "Njeri"


class TestAddressBook:
    def test_addresses_listed_default_first(self, client):
        user_id = _register(client)
        _add_address(client, user_id)
        second = _add_address(client, user_id, street="40 Kenyatta Avenue", is_default=True)

        response = client.get("/users/me/addresses", headers=_as(user_id))
        assert response.status_code == 200
        addresses = response.json()
        assert addresses[0]["address_id"] == second
        assert [a["is_default"] for a in addresses] == [True, False]

    def test_update_set_default_and_remove(self, client):
        user_id = _register(client)
        first = _add_address(client, user_id)
        second = _add_address(client, user_id, street="40 Kenyatta Avenue")

        assert client.put(f"/users/me/addresses/{first}", json={"city": "Thika"}, headers=_as(user_id)).status_code == 200
        assert client.put(f"/users/me/addresses/{second}/default", headers=_as(user_id)).status_code == 200
        assert client.delete(f"/users/me/addresses/{second}", headers=_as(user_id)).status_code == 200

        addresses = client.get("/users/me/addresses", headers=_as(user_id)).json()
        assert len(addresses) == 1
        assert addresses[0]["city"] == "Thika"
        assert addresses[0]["is_default"] is True


class TestAdministration:
    def test_user_cannot_view_someone_else(self, client):
        user_id = _register(client)
        other = _register(client, email="other@example.com")
        assert client.get(f"/users/{other}", headers=_as(user_id)).status_code == 403

    def test_admin_can_view_and_change_role(self, client):
        user_id = _register(client)
        admin = _as("admin-1", role="Admin")

        assert client.get(f"/users/{user_id}", headers=admin).status_code == 200
        response = client.put(f"/users/{user_id}/role", json={"role": "Professional"}, headers=admin)
        assert response.status_code == 200
        assert client.get(f"/users/{user_id}", headers=admin).json()["role"] == "Professional"

    def test_customer_cannot_suspend(self, client):
        user_id = _register(client)
        response = client.put(f"/users/{user_id}/suspend", json={"reason": "x"}, headers=_as("u-2"))
        assert response.status_code == 403

    def test_suspend_and_reactivate(self, client):
        user_id = _register(client)
        admin = _as("admin-1", role="Super_Admin")
        assert client.put(f"/users/{user_id}/suspend", json={"reason": "Fraud"}, headers=admin).status_code == 200
        assert client.get(f"/users/{user_id}", headers=admin).json()["status"] == "Suspended"
        assert client.put(f"/users/{user_id}/reactivate", headers=admin).status_code == 200

    def test_unknown_user_returns_404(self, client):
        assert client.get("/users/ghost", headers=_as("admin-1", role="Admin")).status_code == 404
