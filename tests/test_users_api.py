"""Tests for the /api/users routes."""

import asyncio

from railway_defects.routes.users import pwd_context

NEW_USER = {
    "name": "Nimal Bandara",
    "email": "Nimal.Bandara@Railway.lk",
    "role": "maintenance",
    "department": "Team 2",
    "expertise": ["welding"],
    "phoneNumber": "+94 77 123 4567",
    "password": "Track#2025",
    "isActive": True,
}


def test_list_users(client):
    response = client.get("/api/users")

    assert response.status_code == 200
    users = response.json()
    assert [user["name"] for user in users] == ["John Inspector", "Jane Maintenance"]
    assert users[0]["isActive"] is True
    assert users[1]["isActive"] is False


def test_create_user(client, app):
    response = client.post("/api/users", json=NEW_USER)

    assert response.status_code == 201
    created = response.json()
    assert created["email"] == "nimal.bandara@railway.lk"
    assert created["role"] == "maintenance"
    assert created["phoneNumber"] == "+94 77 123 4567"
    assert "password" not in created and "passwordHash" not in created

    stored = asyncio.run(app.state.user_store.get_user(created["id"]))
    assert stored["passwordHash"] != NEW_USER["password"]
    assert pwd_context.verify(NEW_USER["password"], stored["passwordHash"])


def test_create_user_duplicate_email(client):
    assert client.post("/api/users", json=NEW_USER).status_code == 201

    response = client.post("/api/users", json={**NEW_USER, "email": "NIMAL.BANDARA@railway.lk"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Email already in use"


def test_create_user_requires_department(client):
    assert client.post("/api/users", json={**NEW_USER, "department": "  "}).status_code == 422


def test_create_user_rejects_invalid_email(client):
    assert client.post("/api/users", json={**NEW_USER, "email": "not-an-email"}).status_code == 422


def test_create_user_rejects_unknown_role(client):
    assert client.post("/api/users", json={**NEW_USER, "role": "driver"}).status_code == 422


def test_toggle_user_status(client):
    response = client.put("/api/users/sample2/status", json={"isActive": True})

    assert response.status_code == 200
    assert response.json()["isActive"] is True
    assert all(user["isActive"] for user in client.get("/api/users").json())


def test_toggle_missing_user(client):
    assert client.put("/api/users/ghost/status", json={"isActive": False}).status_code == 404


def test_status_body_is_required(client):
    assert client.put("/api/users/sample1/status", json={}).status_code == 422


def test_delete_user(client):
    response = client.delete("/api/users/sample1")

    assert response.status_code == 200
    assert [user["id"] for user in client.get("/api/users").json()] == ["sample2"]
    assert client.delete("/api/users/sample1").status_code == 404
