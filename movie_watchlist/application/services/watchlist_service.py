"""Watchlist application service: per-user saved movies in the document store.

Every operation takes the caller's user id; an empty id makes the operation
a no-op that never touches the store.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from movie_watchlist.application.dtos.movie import MovieUpsert, SavedMovie, StoredDocument
from movie_watchlist.application.interfaces.gateways import (
    IDocumentStore,
    StoreErrorListener,
)
from movie_watchlist.domain.enums import WatchStatus
from movie_watchlist.domain.exceptions import StoreError
from movie_watchlist.domain.store_paths import movie_document_path, user_movies_path
from movie_watchlist.shared.subscription import Subscription
from movie_watchlist.shared.utils.datetime import ensure_utc, utc_now

logger = logging.getLogger(__name__)

SavedMoviesListener = Callable[[list[SavedMovie]], None]


def _to_saved_movie(doc: StoredDocument) -> SavedMovie | None:
    """Build SavedMovie from a stored document; None when the document is unusable."""
    data = doc.data
    try:
        status = WatchStatus(data.get("status"))
    except ValueError:
        logger.warning("Skipping saved movie %s with unknown status %r", doc.id, data.get("status"))
        return None
    year = data.get("year")
    return SavedMovie(
        id=doc.id,
        title=data.get("title") or "",
        status=status,
        year=year if isinstance(year, int) else None,
        poster_path=data.get("posterPath") or None,
        created_at=ensure_utc(data.get("createdAt")),
        updated_at=ensure_utc(data.get("updatedAt")),
    )


def to_saved_movies(docs: list[StoredDocument]) -> list[SavedMovie]:
    return [movie for movie in (_to_saved_movie(d) for d in docs) if movie is not None]


class WatchlistService:
    """Subscribe, upsert, remove and bulk-delete a user's saved movies."""

    def __init__(
        self,
        store: IDocumentStore,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._clock = clock

    def subscribe(
        self,
        user_id: str,
        on_change: SavedMoviesListener,
        on_error: StoreErrorListener | None = None,
    ) -> Subscription:
        """Live list of the user's saved movies (initial load and every change).

        The caller owns the returned handle and must cancel it on teardown.
        """
        if not user_id:
            return Subscription.inert("watchlist:<no user>")

        def deliver(docs: list[StoredDocument]) -> None:
            on_change(to_saved_movies(docs))

        return self._store.subscribe_collection(user_movies_path(user_id), deliver, on_error)

    async def upsert(self, user_id: str, movie: MovieUpsert) -> None:
        """Write or merge (user_id, movie.id); keeps createdAt, refreshes updatedAt."""
        if not user_id:
            return
        path = movie_document_path(user_id, str(movie.id))
        now = self._clock()
        created_at = movie.created_at
        if created_at is None:
            existing = await self._store.get(path)
            created_at = (existing or {}).get("createdAt") or now
        fields: dict[str, Any] = {
            "id": str(movie.id),
            "title": movie.title,
            "year": movie.year,
            "posterPath": movie.poster_path,
            "status": movie.status.value,
            "createdAt": created_at,
            "updatedAt": now,
        }
        await self._store.write_merge(path, fields)
        logger.debug("Saved movie %s as %s", movie.id, movie.status.value)

    async def remove(self, user_id: str, movie_id: str) -> None:
        """Delete (user_id, movie_id) if present."""
        if not user_id:
            return
        await self._store.delete(movie_document_path(user_id, str(movie_id)))
        logger.debug("Removed movie %s", movie_id)

    async def delete_all(self, user_id: str) -> int:
        """Delete every saved movie of the user, concurrently.

        Returns the number of deleted documents. Raises StoreError when any
        deletion failed (the outcome is never a silent partial success).
        """
        if not user_id:
            return 0
        docs = await self._store.list_children(user_movies_path(user_id))
        results = await asyncio.gather(
            *(self._store.delete(movie_document_path(user_id, d.id)) for d in docs),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            for failure in failures:
                if not isinstance(failure, Exception):
                    raise failure
            logger.error(
                "Deleting saved movies failed for %d of %d documents", len(failures), len(docs)
            )
            first = failures[0]
            raise StoreError(
                f"Could not delete {len(failures)} of {len(docs)} saved movies",
                status_code=getattr(first, "status_code", None),
                path=user_movies_path(user_id),
            ) from first
        logger.info("Deleted %d saved movies", len(docs))
        return len(docs)
