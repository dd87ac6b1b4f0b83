"""Tests for the TMDB catalog client (httpx.MockTransport, no network)."""

import httpx
import pytest

from movie_watchlist.domain.enums import PosterSize
from movie_watchlist.domain.exceptions import CatalogError
from movie_watchlist.infrastructure.external.tmdb import (
    TmdbCatalogClient,
    normalize_results,
    poster_url,
)

RESULTS = {
    "page": 1,
    "results": [
        {"id": 603, "title": "The Matrix", "release_date": "1999-03-30", "poster_path": "/m.jpg"},
        {"id": 604, "title": "The Matrix Reloaded", "release_date": "", "poster_path": None},
        {"id": 999, "title": "Adult", "adult": True},
        {"title": "No id"},
        {"id": 5, "title": "  "},
    ],
}


def _client(handler, requests: list[httpx.Request]) -> TmdbCatalogClient:
    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(record))
    return TmdbCatalogClient("k123", http_client=http)


def test_poster_url_none_for_missing_path() -> None:
    assert poster_url(None) is None
    assert poster_url("") is None


def test_poster_url_is_deterministic() -> None:
    """poster_url("/abc.jpg", "w342") builds the CDN URL."""
    assert poster_url("/abc.jpg", "w342") == "https://image.tmdb.org/t/p/w342/abc.jpg"
    assert poster_url("/abc.jpg", PosterSize.MEDIUM) == "https://image.tmdb.org/t/p/w342/abc.jpg"
    assert poster_url("/abc.jpg", PosterSize.SMALL) == "https://image.tmdb.org/t/p/w185/abc.jpg"


def test_normalize_results_drops_unusable_entries() -> None:
    entries = normalize_results(RESULTS)
    assert [(e.id, e.title, e.release_year) for e in entries] == [
        (603, "The Matrix", 1999),
        (604, "The Matrix Reloaded", None),
    ]
    assert entries[1].poster_path is None


def test_normalize_results_empty_payload() -> None:
    assert normalize_results({}) == []


@pytest.mark.parametrize("term", ["", "   "])
async def test_search_blank_term_makes_no_request(term: str) -> None:
    requests: list[httpx.Request] = []
    client = _client(lambda r: httpx.Response(200, json=RESULTS), requests)
    assert await client.search(term) == []
    assert requests == []


async def test_search_sends_trimmed_query() -> None:
    requests: list[httpx.Request] = []
    client = _client(lambda r: httpx.Response(200, json=RESULTS), requests)
    entries = await client.search("  matrix ")
    assert len(entries) == 2
    request = requests[0]
    assert request.url.path == "/3/search/movie"
    assert request.url.params["query"] == "matrix"
    assert request.url.params["include_adult"] == "false"
    assert request.url.params["language"] == "en-US"
    assert request.url.params["api_key"] == "k123"


async def test_list_popular_requests_first_page() -> None:
    requests: list[httpx.Request] = []
    client = _client(lambda r: httpx.Response(200, json=RESULTS), requests)
    entries = await client.list_popular()
    assert [e.id for e in entries] == [603, 604]
    assert requests[0].url.path == "/3/movie/popular"
    assert requests[0].url.params["page"] == "1"


async def test_non_success_raises_catalog_error_with_status() -> None:
    client = _client(lambda r: httpx.Response(401, json={"status_message": "bad key"}), [])
    with pytest.raises(CatalogError) as exc_info:
        await client.search("matrix")
    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "TMDB error: 401"


async def test_transport_error_raises_catalog_error_without_status() -> None:
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    client = _client(fail, [])
    with pytest.raises(CatalogError) as exc_info:
        await client.list_popular()
    assert exc_info.value.status_code is None


async def test_non_json_body_raises_catalog_error() -> None:
    client = _client(lambda r: httpx.Response(200, content=b"<html>"), [])
    with pytest.raises(CatalogError):
        await client.search("matrix")


def test_client_poster_url_uses_image_base() -> None:
    client = TmdbCatalogClient("k", http_client=httpx.AsyncClient(), image_base_url="https://cdn.test/p/")
    assert client.poster_url("/x.jpg") == "https://cdn.test/p/w342/x.jpg"
