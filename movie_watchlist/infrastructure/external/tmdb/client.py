"""TMDB catalog client (implements ICatalogClient).

Stateless request/response wrapper: keyword search and the popular listing,
normalized into CatalogEntry items, plus pure poster URL construction.
No retries; a non-success response raises CatalogError with the status code.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from movie_watchlist.application.dtos.movie import CatalogEntry
from movie_watchlist.domain.enums import PosterSize
from movie_watchlist.domain.exceptions import CatalogError

logger = logging.getLogger(__name__)

TMDB_API_BASE_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"


def poster_url(
    path: str | None,
    size: PosterSize | str = PosterSize.MEDIUM,
    *,
    base_url: str = TMDB_IMAGE_BASE_URL,
) -> str | None:
    """Image CDN URL for a poster path; None when there is no poster.

    >>> poster_url("/abc.jpg", "w342")
    'https://image.tmdb.org/t/p/w342/abc.jpg'
    """
    if not path:
        return None
    token = size.value if isinstance(size, PosterSize) else size
    return f"{base_url.rstrip('/')}/{token}{path}"


def _release_year(release_date: Any) -> int | None:
    if not isinstance(release_date, str) or len(release_date) < 4:
        return None
    head = release_date[:4]
    return int(head) if head.isdigit() else None


def normalize_results(payload: dict[str, Any]) -> list[CatalogEntry]:
    """Turn a TMDB `results` payload into CatalogEntry items.

    Entries without an id or title, and entries flagged adult, are dropped.
    """
    entries: list[CatalogEntry] = []
    for item in payload.get("results") or []:
        if not isinstance(item, dict) or item.get("adult"):
            continue
        movie_id = item.get("id")
        title = (item.get("title") or item.get("name") or "").strip()
        if not isinstance(movie_id, int) or not title:
            continue
        entries.append(
            CatalogEntry(
                id=movie_id,
                title=title,
                release_year=_release_year(item.get("release_date")),
                poster_path=item.get("poster_path") or None,
            )
        )
    return entries


class TmdbCatalogClient:
    """Movie catalog backed by the TMDB v3 REST API."""

    def __init__(
        self,
        api_key: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = TMDB_API_BASE_URL,
        image_base_url: str = TMDB_IMAGE_BASE_URL,
        language: str = "en-US",
    ) -> None:
        self._api_key = api_key
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=20.0)
        self._owns_http = http_client is None
        self._base_url = base_url.rstrip("/")
        self._image_base_url = image_base_url
        self._language = language

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def _get_json(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        query = {"api_key": self._api_key, "language": self._language, **params}
        try:
            resp = await self._http.get(url, params=query, headers={"accept": "application/json"})
        except httpx.HTTPError as exc:
            logger.warning("TMDB request to %s failed: %s", path, exc)
            raise CatalogError(f"TMDB request failed: {exc}") from exc
        if not resp.is_success:
            logger.warning("TMDB %s returned HTTP %s", path, resp.status_code)
            raise CatalogError(f"TMDB error: {resp.status_code}", status_code=resp.status_code)
        try:
            payload = resp.json()
        except ValueError as exc:
            raise CatalogError(
                "TMDB returned non-JSON response.", status_code=resp.status_code
            ) from exc
        if not isinstance(payload, dict):
            raise CatalogError("TMDB returned unexpected JSON shape (not an object).")
        return payload

    async def search(self, term: str) -> list[CatalogEntry]:
        """Search movies by keyword. Empty or whitespace-only terms return []."""
        query = (term or "").strip()
        if not query:
            return []
        payload = await self._get_json(
            "/search/movie", {"query": query, "include_adult": "false"}
        )
        return normalize_results(payload)

    async def list_popular(self) -> list[CatalogEntry]:
        """First page of the popular movies listing."""
        payload = await self._get_json("/movie/popular", {"page": 1})
        return normalize_results(payload)

    def poster_url(
        self, path: str | None, size: PosterSize | str = PosterSize.MEDIUM
    ) -> str | None:
        return poster_url(path, size, base_url=self._image_base_url)
