"""Pytest configuration and fixtures for movie-watchlist.

Required settings are set in the environment before any movie_watchlist
import (main.py builds the app at import time). HTTP tests run the app
against in-memory fakes through ASGITransport, with the lifespan entered
explicitly since ASGITransport does not send lifespan events.
"""

import os

os.environ.setdefault("TMDB_API_KEY", "test-tmdb-key")
os.environ.setdefault("FIREBASE_API_KEY", "test-firebase-key")
os.environ.setdefault("FIREBASE_PROJECT_ID", "test-project")

import pytest
from httpx import ASGITransport, AsyncClient

from movie_watchlist.application.dtos.movie import CatalogEntry
from movie_watchlist.core.context import ClientContext
from movie_watchlist.core.lifespan import create_lifespan
from movie_watchlist.main import create_app
from tests.fakes import FakeCatalog, FakeIdentityGateway, InMemoryDocumentStore

CATALOG_ENTRIES = [
    CatalogEntry(id=603, title="The Matrix", release_year=1999, poster_path="/matrix.jpg"),
    CatalogEntry(id=604, title="The Matrix Reloaded", release_year=2003, poster_path=None),
    CatalogEntry(id=11, title="Star Wars", release_year=1977, poster_path="/sw.jpg"),
]


@pytest.fixture
def journal() -> list[tuple[str, str]]:
    """Ordered record of external effects shared by the fakes."""
    return []


@pytest.fixture
def gateway(journal) -> FakeIdentityGateway:
    return FakeIdentityGateway(journal)


@pytest.fixture
def store(journal) -> InMemoryDocumentStore:
    return InMemoryDocumentStore(journal)


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog(list(CATALOG_ENTRIES))


@pytest.fixture
async def context(gateway, store, catalog) -> ClientContext:
    """Activated client context over the fakes; closed after the test."""
    ctx = ClientContext.from_collaborators(gateway, store, catalog)
    ctx.activate()
    yield ctx
    await ctx.aclose()


@pytest.fixture
async def client(gateway, store, catalog) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) wired to the fakes."""
    app = create_app(ClientContext.from_collaborators(gateway, store, catalog))
    transport = ASGITransport(app=app)
    async with create_lifespan(app):
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
