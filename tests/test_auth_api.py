import pytest
from fastapi import status


def _register(client, **overrides):
    body = {
        "name": "Ada Employer",
        "email": "ada@acme.io",
        "password": "secret123",
        "role": "employer",
    }
    body.update(overrides)
    return client.post("/api/auth/register", json=body)


def test_register_returns_token_and_user(client):
    response = _register(client)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["success"] is True
    assert data["token"]
    assert data["user"]["role"] == "employer"
    assert data["user"]["email"] == "ada@acme.io"


def test_register_defaults_to_job_seeker(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Sam", "email": "sam@acme.io", "password": "secret123"},
    )
    assert response.status_code == 201
    assert response.json()["user"]["role"] == "job_seeker"


def test_register_duplicate_email(client):
    assert _register(client).status_code == 201
    response = _register(client, email="ADA@acme.io")
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "User already exists"}


def test_register_cannot_self_assign_admin(client):
    response = _register(client, role="admin")
    assert response.status_code == 400


def test_register_validates_input(client):
    response = _register(client, password="123", email="not-an-email")
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert {e["field"] for e in body["errors"]} == {"password", "email"}


def test_login_success(client, employer, user_password):
    """Test successful login with valid credentials."""
    response = client.post("/api/auth/login", json={"email": employer.email, "password": user_password})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["token"]
    assert data["user"]["id"] == employer.id


def test_login_invalid_credentials(client):
    """Test login failure with wrong password."""
    response = client.post("/api/auth/login", json={"email": "nonexistent@acme.io", "password": "wrong"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message"] == "Invalid credentials"


def test_me_requires_token(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Not authorized to access this route"}


def test_me_rejects_garbage_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer nonsense"})
    assert response.status_code == 401


def test_me_returns_current_user(client, seeker, auth_headers):
    response = client.get("/api/auth/me", headers=auth_headers(seeker))
    assert response.status_code == 200
    assert response.json()["data"]["email"] == seeker.email
