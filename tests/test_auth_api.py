from app.services.auth_service import auth_service

from conftest import register


def test_register_returns_user_and_token(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Ana", "email": "ana@example.com", "password": "s3cret-pass"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "ana@example.com"
    assert body["user"]["name"] == "Ana"
    assert "password_hash" not in body["user"]
    assert auth_service.decode_access_token(body["token"]) == body["user"]["id"]


def test_register_requires_all_fields(client):
    response = client.post(
        "/api/auth/register", json={"email": "ana@example.com", "password": "x"}
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_register_rejects_duplicate_email(client):
    register(client)

    response = client.post(
        "/api/auth/register",
        json={"name": "Other", "email": "ana@example.com", "password": "another"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


def test_login_with_valid_credentials(client):
    register(client)

    response = client.post(
        "/api/auth/login",
        json={"email": "ana@example.com", "password": "s3cret-pass"},
    )

    assert response.status_code == 200
    assert response.json()["token"]


def test_login_with_wrong_password(client):
    register(client)

    response = client.post(
        "/api/auth/login", json={"email": "ana@example.com", "password": "nope"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_login_unknown_user(client):
    response = client.post(
        "/api/auth/login", json={"email": "ghost@example.com", "password": "nope"}
    )

    assert response.status_code == 401


def test_login_requires_fields(client):
    response = client.post("/api/auth/login", json={"email": "ana@example.com"})

    assert response.status_code == 400


def test_me_returns_current_user(client):
    headers = register(client)

    response = client.get("/api/auth/me", headers=headers)

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "ana@example.com"


def test_protected_routes_require_token(client):
    response = client.get("/api/document")

    assert response.status_code == 401
    assert response.json()["error_code"] == "MISSING_TOKEN"


def test_invalid_token_is_rejected(client):
    response = client.get(
        "/api/document", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401
    assert response.json()["error_code"] == "INVALID_TOKEN"


def test_public_routes(client):
    assert client.get("/api/health").json()["status"] == "ok"
    assert client.get("/").status_code == 200
