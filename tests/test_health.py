"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("app") == "movie-watchlist"


async def test_root_shows_login_when_signed_out(client: AsyncClient) -> None:
    """GET / returns the login screen when nobody is signed in."""
    response = await client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers.get("content-type", "")
    assert "Forgot password?" in response.text


async def test_root_shows_home_when_signed_in(client: AsyncClient, gateway) -> None:
    gateway.sign_in_as("u1", email="ann@example.com")
    response = await client.get("/")
    assert "Signed in as ann@example.com" in response.text
    assert "Delete account" in response.text


async def test_home_page_renders_movie_data_as_text(client: AsyncClient, gateway) -> None:
    """Titles and poster URLs are assigned to DOM nodes, never parsed as HTML."""
    gateway.sign_in_as("u1", email="<b>ann</b>@example.com")
    response = await client.get("/")
    assert "innerHTML" not in response.text
    assert "text.textContent = m.title" in response.text
    assert "img.src = m.poster_url" in response.text
    assert "<b>ann</b>" not in response.text
