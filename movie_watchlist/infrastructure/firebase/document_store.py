"""Firestore-backed document store (implements IDocumentStore).

Live collection subscriptions are asyncio listener tasks: each one lists the
collection, delivers the snapshot when it differs from the last one delivered,
then waits for the poll interval or for a local write to the same collection,
whichever comes first. One task per subscription keeps deliveries in order.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from movie_watchlist.application.dtos.movie import StoredDocument
from movie_watchlist.application.interfaces.gateways import (
    SnapshotListener,
    StoreErrorListener,
)
from movie_watchlist.domain.enums import AuthErrorReason
from movie_watchlist.domain.exceptions import AuthError, StoreError, WatchlistException
from movie_watchlist.infrastructure.firebase._rest_client import FirestoreRESTClient
from movie_watchlist.shared.subscription import Subscription

logger = logging.getLogger(__name__)


def _parent_path(path: str) -> str:
    return path.strip("/").rsplit("/", 1)[0]


def _is_transient(exc: WatchlistException) -> bool:
    """Network failures reaching the store or refreshing the ID token."""
    if isinstance(exc, StoreError):
        return exc.status_code is None
    return isinstance(exc, AuthError) and exc.reason is AuthErrorReason.UNAVAILABLE


class FirestoreDocumentStore:
    """Document store using the Firestore REST API."""

    def __init__(
        self,
        client: FirestoreRESTClient,
        *,
        poll_interval_seconds: float = 5.0,
    ) -> None:
        self._client = client
        self._poll_interval = poll_interval_seconds
        self._wakeups: dict[str, set[asyncio.Event]] = {}

    async def write_merge(self, path: str, fields: dict[str, Any]) -> None:
        """Create the document or merge fields into it (other fields kept)."""
        await self._client.document(path).set(fields, merge=True)
        self._wake_listeners(_parent_path(path))

    async def get(self, path: str) -> dict[str, Any] | None:
        """Return decoded fields of the document, or None if it does not exist."""
        snapshot = await self._client.document(path).get()
        return snapshot.to_dict() if snapshot else None

    async def delete(self, path: str) -> None:
        """Delete the document (missing is fine)."""
        await self._client.document(path).delete()
        self._wake_listeners(_parent_path(path))

    async def list_children(self, path: str) -> list[StoredDocument]:
        """Return all documents of the collection, ordered by document id."""
        return [
            StoredDocument(snapshot.id, snapshot.to_dict())
            async for snapshot in self._client.collection(path).stream()
        ]

    def subscribe_collection(
        self,
        path: str,
        on_snapshot: SnapshotListener,
        on_error: StoreErrorListener | None = None,
    ) -> Subscription:
        """Start a listener task for the collection; must be called on the event loop."""
        key = path.strip("/")
        wake = asyncio.Event()
        self._wakeups.setdefault(key, set()).add(wake)
        task = asyncio.get_running_loop().create_task(
            self._listen(key, wake, on_snapshot, on_error),
            name=f"listen:{key}",
        )

        def release() -> None:
            task.cancel()
            listeners = self._wakeups.get(key)
            if listeners is not None:
                listeners.discard(wake)
                if not listeners:
                    del self._wakeups[key]

        logger.debug("Collection listener started: %s", key)
        return Subscription(release, name=f"collection:{key}")

    def _wake_listeners(self, collection_path: str) -> None:
        for wake in self._wakeups.get(collection_path, ()):
            wake.set()

    async def _listen(
        self,
        path: str,
        wake: asyncio.Event,
        on_snapshot: SnapshotListener,
        on_error: StoreErrorListener | None,
    ) -> None:
        last: list[StoredDocument] | None = None
        while True:
            wake.clear()
            try:
                docs = await self.list_children(path)
            except WatchlistException as exc:
                if _is_transient(exc):
                    # Keep the listener and try again on the next poll.
                    logger.warning("Collection listener %s could not reach the store: %s", path, exc)
                else:
                    error = exc if isinstance(exc, StoreError) else StoreError(exc.message, path=path)
                    logger.error("Collection listener %s stopped: %s", path, error)
                    if on_error is not None:
                        on_error(error)
                    return
            else:
                if docs != last:
                    last = docs
                    try:
                        on_snapshot(list(docs))
                    except Exception:
                        logger.exception("Snapshot callback failed for %s", path)
            try:
                await asyncio.wait_for(wake.wait(), timeout=self._poll_interval)
            except TimeoutError:
                pass
