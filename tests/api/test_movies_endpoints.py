"""API tests for /catalog, /movies and /session/notices."""

import pytest
from httpx import AsyncClient

from movie_watchlist.domain.exceptions import CatalogError


@pytest.fixture
def signed_in(gateway):
    return gateway.sign_in_as("u1")


async def test_catalog_requires_sign_in(client: AsyncClient) -> None:
    response = await client.get("/api/v1/catalog/popular")
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_search(client: AsyncClient, signed_in) -> None:
    response = await client.get("/api/v1/catalog/search", params={"q": "matrix"})
    assert response.status_code == 200
    body = response.json()
    assert body["tab"] == "search"
    assert [item["id"] for item in body["items"]] == ["603", "604"]
    assert body["items"][0]["poster_url"] == "https://image.tmdb.org/t/p/w342/matrix.jpg"
    assert body["items"][0]["status"] is None


async def test_blank_search_returns_nothing(client: AsyncClient, signed_in, catalog) -> None:
    response = await client.get("/api/v1/catalog/search", params={"q": "  "})
    assert response.json()["items"] == []
    assert catalog.requests == []


async def test_catalog_failure_502(client: AsyncClient, signed_in, catalog) -> None:
    catalog.error = CatalogError("TMDB error: 500", status_code=500)
    response = await client.get("/api/v1/catalog/popular")
    assert response.status_code == 502
    assert response.json()["notice"]["kind"] == "catalog"
    notices = (await client.get("/api/v1/session/notices")).json()["items"]
    assert len(notices) == 1
    assert (await client.delete("/api/v1/session/notices")).status_code == 204
    assert (await client.get("/api/v1/session/notices")).json()["items"] == []


async def test_save_list_move_remove(client: AsyncClient, signed_in, store) -> None:
    response = await client.put(
        "/api/v1/movies/603",
        json={"status": "toWatch", "title": "The Matrix", "year": 1999, "poster_path": "/matrix.jpg"},
    )
    assert response.status_code == 200
    to_watch = (await client.get("/api/v1/movies", params={"status": "toWatch"})).json()
    assert [item["id"] for item in to_watch["items"]] == ["603"]

    created = store.docs["users/u1/movies/603"]["createdAt"]
    response = await client.put("/api/v1/movies/603", json={"status": "watched"})
    assert response.status_code == 200
    watched = (await client.get("/api/v1/movies", params={"status": "watched"})).json()
    assert watched["items"][0]["status"] == "watched"
    assert store.docs["users/u1/movies/603"]["createdAt"] == created

    search = (await client.get("/api/v1/catalog/search", params={"q": "matrix"})).json()
    assert search["items"][0]["status"] == "watched"

    assert (await client.delete("/api/v1/movies/603")).status_code == 200
    assert (await client.get("/api/v1/movies")).json()["items"] == []


async def test_move_unsaved_movie_without_title_400(client: AsyncClient, signed_in) -> None:
    response = await client.put("/api/v1/movies/42", json={"status": "watched"})
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "title"}


async def test_invalid_status_422(client: AsyncClient, signed_in) -> None:
    response = await client.put("/api/v1/movies/603", json={"status": "maybe", "title": "X"})
    assert response.status_code == 422


async def test_remove_missing_movie_is_ok(client: AsyncClient, signed_in) -> None:
    assert (await client.delete("/api/v1/movies/12345")).status_code == 200


async def test_store_failure_502(client: AsyncClient, signed_in, store) -> None:
    store.fail_writes = True
    response = await client.put("/api/v1/movies/603", json={"status": "toWatch", "title": "The Matrix"})
    assert response.status_code == 502
    assert response.json()["notice"]["kind"] == "store"
