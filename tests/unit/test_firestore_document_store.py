"""Tests for FirestoreDocumentStore over an httpx.MockTransport Firestore."""

import asyncio
import json
from typing import Any

import httpx
import pytest

from movie_watchlist.application.dtos.movie import StoredDocument
from movie_watchlist.domain.enums import AuthErrorReason
from movie_watchlist.domain.exceptions import AuthError, StoreError
from movie_watchlist.infrastructure.firebase._rest_client import FirestoreRESTClient
from movie_watchlist.infrastructure.firebase._rest_encoding import decode_fields
from movie_watchlist.infrastructure.firebase.document_store import FirestoreDocumentStore

PREFIX = "projects/test-project/databases/(default)/documents"


class FakeFirestore:
    """Minimal Firestore REST server: PATCH (with updateMask), GET, list, DELETE."""

    def __init__(self) -> None:
        self.docs: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_status: int | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_status is not None:
            return httpx.Response(self.fail_status, json={"error": {"status": "DENIED"}})
        path = request.url.path.split("/documents/", 1)[1]
        segments = path.split("/")
        if request.method == "PATCH":
            fields = json.loads(request.content)["fields"]
            mask = request.url.params.get_list("updateMask.fieldPaths")
            current = self.docs.get(path, {}) if mask else {}
            current.update(fields)
            self.docs[path] = current
            return httpx.Response(200, json={"name": f"{PREFIX}/{path}", "fields": current})
        if request.method == "DELETE":
            self.docs.pop(path, None)
            return httpx.Response(200, json={})
        if len(segments) % 2 == 1:
            prefix = path + "/"
            documents = [
                {"name": f"{PREFIX}/{key}", "fields": fields}
                for key, fields in sorted(self.docs.items())
                if key.startswith(prefix) and "/" not in key[len(prefix):]
            ]
            return httpx.Response(200, json={"documents": documents} if documents else {})
        if path not in self.docs:
            return httpx.Response(404, json={"error": {"code": 404}})
        return httpx.Response(200, json={"name": f"{PREFIX}/{path}", "fields": self.docs[path]})


@pytest.fixture
def firestore() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture
def store(firestore) -> FirestoreDocumentStore:
    async def token() -> str:
        return "id-token-1"

    http = httpx.AsyncClient(transport=httpx.MockTransport(firestore.handler))
    client = FirestoreRESTClient("test-project", token, http_client=http)
    return FirestoreDocumentStore(client, poll_interval_seconds=60)


async def test_write_merge_sends_update_mask_and_bearer(store, firestore) -> None:
    await store.write_merge("users/u1/movies/603", {"title": "The Matrix", "status": "toWatch"})
    request = firestore.requests[0]
    assert request.method == "PATCH"
    assert request.url.params.get_list("updateMask.fieldPaths") == ["title", "status"]
    assert request.headers["Authorization"] == "Bearer id-token-1"


async def test_write_merge_keeps_other_fields(store, firestore) -> None:
    await store.write_merge("users/u1/movies/603", {"title": "The Matrix", "status": "toWatch"})
    await store.write_merge("users/u1/movies/603", {"status": "watched"})
    assert decode_fields(firestore.docs["users/u1/movies/603"]) == {
        "title": "The Matrix",
        "status": "watched",
    }


async def test_get_missing_returns_none(store) -> None:
    assert await store.get("users/u1/movies/404") is None


async def test_get_decodes_fields(store) -> None:
    await store.write_merge("users/u1/movies/603", {"year": 1999})
    assert await store.get("users/u1/movies/603") == {"year": 1999}


async def test_list_children_returns_documents(store) -> None:
    await store.write_merge("users/u1/movies/11", {"title": "Star Wars"})
    await store.write_merge("users/u1/movies/603", {"title": "The Matrix"})
    await store.write_merge("users/u2/movies/1", {"title": "Other user"})
    docs = await store.list_children("users/u1/movies")
    assert docs == [
        StoredDocument("11", {"title": "Star Wars"}),
        StoredDocument("603", {"title": "The Matrix"}),
    ]


async def test_list_children_empty_collection(store) -> None:
    assert await store.list_children("users/nobody/movies") == []


async def test_list_children_follows_page_tokens() -> None:
    calls: list[str | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        token = request.url.params.get("pageToken")
        calls.append(token)
        if token is None:
            return httpx.Response(200, json={
                "documents": [{"name": f"{PREFIX}/users/u1/movies/1", "fields": {}}],
                "nextPageToken": "p2",
            })
        return httpx.Response(200, json={
            "documents": [{"name": f"{PREFIX}/users/u1/movies/2", "fields": {}}],
        })

    async def token() -> None:
        return None

    client = FirestoreRESTClient(
        "test-project", token, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )
    docs = await FirestoreDocumentStore(client).list_children("users/u1/movies")
    assert [d.id for d in docs] == ["1", "2"]
    assert calls == [None, "p2"]


async def test_delete_missing_document_is_fine(store) -> None:
    await store.delete("users/u1/movies/missing")


async def test_http_error_raises_store_error(store, firestore) -> None:
    firestore.fail_status = 403
    with pytest.raises(StoreError) as exc_info:
        await store.write_merge("users/u1/movies/603", {"title": "x"})
    assert exc_info.value.status_code == 403


async def test_transport_error_raises_store_error_without_status() -> None:
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    async def token() -> str:
        return "t"

    client = FirestoreRESTClient(
        "test-project", token, http_client=httpx.AsyncClient(transport=httpx.MockTransport(fail))
    )
    with pytest.raises(StoreError) as exc_info:
        await FirestoreDocumentStore(client).get("users/u1/movies/1")
    assert exc_info.value.status_code is None


async def _next(queue: asyncio.Queue) -> list[StoredDocument]:
    return await asyncio.wait_for(queue.get(), timeout=1)


async def test_subscription_delivers_initial_and_local_changes(store) -> None:
    """Initial snapshot, then a refresh right after a local write (no poll wait)."""
    queue: asyncio.Queue = asyncio.Queue()
    sub = store.subscribe_collection("users/u1/movies", queue.put_nowait)
    try:
        assert await _next(queue) == []
        await store.write_merge("users/u1/movies/603", {"title": "The Matrix"})
        assert [d.id for d in await _next(queue)] == ["603"]
        await store.delete("users/u1/movies/603")
        assert await _next(queue) == []
    finally:
        sub.cancel()


async def test_cancelled_subscription_stops_delivery(store) -> None:
    queue: asyncio.Queue = asyncio.Queue()
    sub = store.subscribe_collection("users/u1/movies", queue.put_nowait)
    await _next(queue)
    sub.cancel()
    await store.write_merge("users/u1/movies/603", {"title": "The Matrix"})
    await asyncio.sleep(0.05)
    assert queue.empty()


async def test_subscription_reports_http_errors(store, firestore) -> None:
    firestore.fail_status = 403
    errors: asyncio.Queue = asyncio.Queue()
    sub = store.subscribe_collection("users/u1/movies", lambda docs: None, errors.put_nowait)
    try:
        exc = await asyncio.wait_for(errors.get(), timeout=1)
        assert isinstance(exc, StoreError)
        assert exc.status_code == 403
    finally:
        sub.cancel()


async def test_failing_snapshot_callback_does_not_stop_listener(store) -> None:
    queue: asyncio.Queue = asyncio.Queue()
    calls = 0

    def on_snapshot(docs: list[StoredDocument]) -> None:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise RuntimeError("view crashed")
        queue.put_nowait(docs)

    sub = store.subscribe_collection("users/u1/movies", on_snapshot)
    try:
        await asyncio.sleep(0.01)
        await store.write_merge("users/u1/movies/603", {"title": "The Matrix"})
        assert [d.id for d in await _next(queue)] == ["603"]
    finally:
        sub.cancel()


def _store_with_token(firestore: FakeFirestore, token) -> FirestoreDocumentStore:
    http = httpx.AsyncClient(transport=httpx.MockTransport(firestore.handler))
    client = FirestoreRESTClient("test-project", token, http_client=http)
    return FirestoreDocumentStore(client, poll_interval_seconds=0.01)


async def test_listener_retries_when_token_refresh_is_unavailable(firestore) -> None:
    """A network failure refreshing the ID token is retried on the next poll."""
    calls = 0

    async def token() -> str:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise AuthError("Network error. Please try again.", AuthErrorReason.UNAVAILABLE)
        return "id-token-1"

    store = _store_with_token(firestore, token)
    queue: asyncio.Queue = asyncio.Queue()
    errors: list[StoreError] = []
    sub = store.subscribe_collection("users/u1/movies", queue.put_nowait, errors.append)
    try:
        assert await _next(queue) == []
        assert calls >= 2
        assert errors == []
    finally:
        sub.cancel()


async def test_listener_reports_rejected_token_as_store_error(firestore) -> None:
    async def token() -> str:
        raise AuthError("Your session has expired.", AuthErrorReason.INVALID_TOKEN)

    store = _store_with_token(firestore, token)
    errors: asyncio.Queue = asyncio.Queue()
    sub = store.subscribe_collection("users/u1/movies", lambda docs: None, errors.put_nowait)
    try:
        exc = await asyncio.wait_for(errors.get(), timeout=1)
        assert isinstance(exc, StoreError)
        assert exc.details["path"] == "users/u1/movies"
    finally:
        sub.cancel()


async def test_malformed_body_raises_store_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>proxy</html>")

    async def token() -> str:
        return "t"

    client = FirestoreRESTClient(
        "test-project", token, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )
    store = FirestoreDocumentStore(client, poll_interval_seconds=0.01)
    with pytest.raises(StoreError):
        await store.get("users/u1/movies/1")

    errors: asyncio.Queue = asyncio.Queue()
    sub = store.subscribe_collection("users/u1/movies", lambda docs: None, errors.put_nowait)
    try:
        exc = await asyncio.wait_for(errors.get(), timeout=1)
        assert exc.status_code == 200
    finally:
        sub.cancel()
