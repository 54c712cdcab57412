"""
Pytest configuration and fixtures for the test suite.
"""

import os

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing the app
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-32chars-minimum"
os.environ["LOG_LEVEL"] = "WARNING"


@pytest.fixture
def client():
    """
    Test client over a fresh application and an empty in-memory database.
    """
    from synergysphere.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def sample_user_data():
    """
    Sample user data for testing.
    """
    return {"email": "test@example.com", "password": "testpassword123", "fullName": "Test User"}


@pytest.fixture
def register(client):
    """
    Registers a user and returns (user, auth headers).
    """
    def _register(email: str, full_name: str = None, password: str = "password123"):
        response = client.post(
            "/auth/register",
            json={"email": email, "password": password, "fullName": full_name or email.split("@")[0]},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}

    return _register


@pytest.fixture
def project_factory(client):
    """
    Creates a project as the given user and returns its JSON.
    """
    def _create(headers: dict, name: str = "Apollo", **fields):
        response = client.post("/projects", json={"name": name, **fields}, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def add_member(client):
    def _add(project_id: str, user_id: str, headers: dict, role: str = "member"):
        response = client.post(
            f"/projects/{project_id}/members",
            json={"userId": user_id, "role": role},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _add
