"""API tests for /auth and /session."""

from httpx import AsyncClient


async def test_session_signed_out(client: AsyncClient) -> None:
    response = await client.get("/api/v1/session")
    assert response.status_code == 200
    assert response.json() == {
        "loading": False,
        "signed_in": False,
        "route": "login",
        "identity": None,
    }


async def test_sign_in_then_session(client: AsyncClient, gateway) -> None:
    gateway.add_account("ann@example.com", "secret1", "u1")
    response = await client.post(
        "/api/v1/auth/sign-in", json={"email": "ann@example.com", "password": "secret1"}
    )
    assert response.status_code == 200
    assert response.json() == {"ok": True, "notice": None}
    session = (await client.get("/api/v1/session")).json()
    assert session["route"] == "home"
    assert session["identity"]["uid"] == "u1"
    assert session["identity"]["providers"] == ["password"]


async def test_sign_in_bad_credentials_401(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/sign-in", json={"email": "ann@example.com", "password": "wrong"}
    )
    assert response.status_code == 401
    body = response.json()
    assert body["ok"] is False
    assert body["notice"]["message"] == "Invalid email or password."
    assert body["notice"]["kind"] == "auth"


async def test_sign_in_invalid_email_422(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/sign-in", json={"email": "not-an-email", "password": "x"}
    )
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_sign_up_password_mismatch_400(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/sign-up",
        json={"email": "ann@example.com", "password": "secret1", "password_confirm": "secret2"},
    )
    assert response.status_code == 400
    assert response.json()["notice"]["message"] == "Passwords do not match"


async def test_sign_up_success(client: AsyncClient, gateway) -> None:
    response = await client.post(
        "/api/v1/auth/sign-up",
        json={"email": "new@example.com", "password": "secret1", "password_confirm": "secret1"},
    )
    assert response.status_code == 200
    assert gateway.identity.email == "new@example.com"


async def test_federated_sign_in(client: AsyncClient, gateway) -> None:
    response = await client.post(
        "/api/v1/auth/federated", json={"id_token": gateway.federated_token}
    )
    assert response.status_code == 200
    assert gateway.identity.uid == "google-uid"


async def test_federated_sign_in_requires_a_token(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/federated", json={})
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["details"]


async def test_password_reset(client: AsyncClient, gateway) -> None:
    response = await client.post("/api/v1/auth/password-reset", json={"email": "ann@example.com"})
    assert response.status_code == 200
    assert response.json()["notice"]["message"] == "Password reset email sent"
    assert gateway.reset_emails == ["ann@example.com"]


async def test_password_reset_without_email(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/password-reset", json={})
    assert response.status_code == 400
    assert response.json()["notice"]["message"] == "Enter your email first"


async def test_sign_out(client: AsyncClient, gateway) -> None:
    gateway.sign_in_as("u1")
    response = await client.post("/api/v1/auth/sign-out")
    assert response.status_code == 200
    assert gateway.identity is None
    assert (await client.get("/api/v1/session")).json()["route"] == "login"
