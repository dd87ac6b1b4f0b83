"""API tests for POST /account/delete."""

from httpx import AsyncClient

from movie_watchlist.core.constants import SIGN_OUT_AND_BACK_IN_MESSAGE
from movie_watchlist.domain.enums import SignInProvider


async def test_requires_sign_in(client: AsyncClient) -> None:
    response = await client.post("/api/v1/account/delete", json={"confirmed": True})
    assert response.status_code == 401


async def test_not_confirmed_is_a_noop(client: AsyncClient, gateway, store) -> None:
    gateway.sign_in_as("u1")
    store.put_movie("u1", "603", "The Matrix", "toWatch")
    response = await client.post("/api/v1/account/delete", json={"confirmed": False})
    assert response.status_code == 200
    assert response.json()["state"] == "idle"
    assert gateway.identity is not None
    assert len(store.docs) == 1


async def test_delete_account(client: AsyncClient, gateway, store) -> None:
    gateway.sign_in_as("u1")
    store.put_movie("u1", "603", "The Matrix", "toWatch")
    response = await client.post("/api/v1/account/delete", json={"confirmed": True})
    assert response.status_code == 200
    body = response.json()
    assert body["state"] == "success"
    assert body["transitions"] == ["confirm_pending", "deleting", "success"]
    assert store.docs == {}
    assert (await client.get("/api/v1/session")).json()["route"] == "login"


async def test_stale_password_account_with_password(client: AsyncClient, gateway) -> None:
    gateway.sign_in_as("u1")
    gateway.stale = True
    response = await client.post(
        "/api/v1/account/delete", json={"confirmed": True, "password": "secret1"}
    )
    assert response.json()["state"] == "success"


async def test_stale_account_without_password_returns_idle(client: AsyncClient, gateway) -> None:
    gateway.sign_in_as("u1")
    gateway.stale = True
    response = await client.post("/api/v1/account/delete", json={"confirmed": True})
    assert response.status_code == 200
    assert response.json()["state"] == "idle"
    assert response.json()["notice"] is None


async def test_stale_federated_account_uses_token(client: AsyncClient, gateway) -> None:
    gateway.sign_in_as("g1", providers=(SignInProvider.FEDERATED,))
    gateway.stale = True
    response = await client.post(
        "/api/v1/account/delete",
        json={"confirmed": True, "federated_id_token": gateway.federated_token},
    )
    assert response.json()["state"] == "success"


async def test_unknown_provider_gets_sign_out_message(client: AsyncClient, gateway) -> None:
    gateway.sign_in_as("u1", providers=(SignInProvider.OTHER,))
    gateway.stale = True
    response = await client.post("/api/v1/account/delete", json={"confirmed": True})
    assert response.json()["notice"]["message"] == SIGN_OUT_AND_BACK_IN_MESSAGE


async def test_wrong_password_fails_401(client: AsyncClient, gateway) -> None:
    gateway.sign_in_as("u1")
    gateway.stale = True
    response = await client.post(
        "/api/v1/account/delete", json={"confirmed": True, "password": "wrong"}
    )
    assert response.status_code == 401
    assert response.json()["state"] == "failure"
