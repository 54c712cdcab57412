"""
Tests for registration, login and the bearer token guard.
"""

from datetime import timedelta
from types import SimpleNamespace
import uuid

from synergysphere.auth.auth_utils import create_access_token


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


def test_root_endpoint(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


def test_register(client, sample_user_data):
    response = client.post("/auth/register", json={**sample_user_data, "email": "Test@Example.com"})
    assert response.status_code == 201
    body = response.json()
    assert body["token"]
    assert body["user"]["email"] == "test@example.com"
    assert body["user"]["full_name"] == "Test User"
    assert "password_hash" not in body["user"]


def test_register_duplicate_email_is_case_insensitive(client, sample_user_data):
    assert client.post("/auth/register", json=sample_user_data).status_code == 201

    response = client.post("/auth/register", json={**sample_user_data, "email": "TEST@example.com"})
    assert response.status_code == 409
    assert response.json()["error"] == "Email already in use"


def test_register_missing_field(client):
    response = client.post("/auth/register", json={"email": "a@example.com", "password": "secret123"})
    assert response.status_code == 400
    assert response.json()["error"] == "fullName is required"


def test_login(client, sample_user_data):
    client.post("/auth/register", json=sample_user_data)

    response = client.post(
        "/auth/login",
        json={"email": "TEST@example.com", "password": sample_user_data["password"]},
    )
    assert response.status_code == 200
    assert response.json()["user"]["email"] == "test@example.com"
    assert response.json()["token"]


def test_login_wrong_password_and_unknown_email(client, sample_user_data):
    client.post("/auth/register", json=sample_user_data)

    wrong = client.post("/auth/login", json={"email": sample_user_data["email"], "password": "nope"})
    unknown = client.post("/auth/login", json={"email": "ghost@example.com", "password": "nope"})
    assert wrong.status_code == 401
    assert unknown.status_code == 401
    assert wrong.json()["error"] == unknown.json()["error"] == "Invalid credentials"


def test_me(client, register):
    user, headers = register("ann@example.com", "Ann")
    response = client.get("/auth/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["user"]["id"] == user["id"]


def test_guard_rejects_missing_and_bad_tokens(client):
    assert client.get("/auth/me").status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Basic abc"}).status_code == 401

    response = client.get("/auth/me", headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized"


def test_guard_rejects_expired_token(client):
    principal = SimpleNamespace(id=uuid.uuid4(), email="old@example.com", full_name="Old")
    token = create_access_token(principal, expires_delta=timedelta(seconds=-5))
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_change_password(client, register):
    _, headers = register("ann@example.com", "Ann", password="first-pass")

    bad = client.patch(
        "/auth/password",
        json={"currentPassword": "wrong", "newPassword": "second-pass"},
        headers=headers,
    )
    assert bad.status_code == 401

    ok = client.patch(
        "/auth/password",
        json={"currentPassword": "first-pass", "newPassword": "second-pass"},
        headers=headers,
    )
    assert ok.status_code == 200

    login = client.post("/auth/login", json={"email": "ann@example.com", "password": "second-pass"})
    assert login.status_code == 200


def test_users_directory_and_profile(client, register):
    ann, headers = register("ann@example.com", "Ann Lee")
    register("bob@example.com", "Bob Stone")

    listing = client.get("/users", params={"q": "stone"}, headers=headers)
    assert listing.status_code == 200
    assert [u["email"] for u in listing.json()["items"]] == ["bob@example.com"]

    assert client.get(f"/users/{ann['id']}", headers=headers).status_code == 200
    assert client.get("/users/not-a-uuid", headers=headers).status_code == 400

    updated = client.patch("/users/me", json={"full_name": "Ann Marie"}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["full_name"] == "Ann Marie"

    empty = client.patch("/users/me", json={}, headers=headers)
    assert empty.status_code == 400
    assert empty.json()["error"] == "No valid fields to update"
