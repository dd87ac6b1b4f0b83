"""Thin Firestore REST API client (no firebase-admin, no grpc).

Requests are authorized with the signed-in user's Firebase ID token, so the
project's security rules apply exactly as they would for a web client.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Every non-success response is raised as StoreError.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any
from urllib.parse import quote

import httpx

from movie_watchlist.core.constants import FIRESTORE_BASE_URL
from movie_watchlist.domain.exceptions import StoreError
from movie_watchlist.infrastructure.firebase._rest_encoding import (
    decode_document,
    encode_document,
)

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Awaitable[str | None]]

_LIST_PAGE_SIZE = 300


def _quote_path(path: str) -> str:
    """Percent-encode each segment of a slash-separated document path."""
    return "/".join(quote(segment, safe="") for segment in path.strip("/").split("/"))


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    params: list[tuple[str, str]] | None = None,
    access_token: str | None = None,
) -> dict | None:
    """Perform async HTTP request to Firestore REST API. 404 returns None."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    try:
        if method == "GET":
            resp = await client.get(url, headers=headers, params=params)
        elif method == "PATCH":
            resp = await client.patch(url, headers=headers, params=params, json=body)
        elif method == "POST":
            resp = await client.post(url, headers=headers, params=params, json=body)
        elif method == "DELETE":
            resp = await client.delete(url, headers=headers, params=params)
        else:
            raise ValueError(f"Unsupported method: {method!r}")
    except httpx.HTTPError as exc:
        raise StoreError(f"Document store request failed: {exc}") from exc
    if resp.status_code == 404:
        return None
    if resp.status_code not in (200, 204):
        raise StoreError(
            f"Document store returned HTTP {resp.status_code}",
            status_code=resp.status_code,
        )
    if method == "DELETE":
        return {}
    if not resp.content:
        return {}
    try:
        return resp.json()
    except ValueError as exc:
        raise StoreError(
            "Document store returned a malformed response",
            status_code=resp.status_code,
        ) from exc


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return self._path.rsplit("/", 1)[-1]

    @property
    def url(self) -> str:
        return f"{self._client.base_url}/{_quote_path(self._path)}"

    async def set(self, data: dict[str, Any], *, merge: bool = False) -> None:
        """Create or overwrite the document.

        With merge=True only the given top-level fields are written (updateMask);
        other fields of an existing document are kept.
        """
        params: list[tuple[str, str]] | None = None
        if merge:
            params = [("updateMask.fieldPaths", key) for key in data]
        await _request_async(
            self._client.http,
            self.url,
            method="PATCH",
            body=encode_document(data),
            params=params,
            access_token=await self._client.get_token(),
        )

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await _request_async(
            self._client.http, self.url, access_token=await self._client.get_token()
        )
        if not out:
            return None
        return DocumentSnapshot(self.id, decode_document(out))

    async def delete(self) -> None:
        """Delete the document. Idempotent if document is already missing (404)."""
        await _request_async(
            self._client.http,
            self.url,
            method="DELETE",
            access_token=await self._client.get_token(),
        )


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path.strip("/")

    @property
    def path(self) -> str:
        return self._path

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """List documents in the collection (shallow), following page tokens."""
        url = f"{self._client.base_url}/{_quote_path(self._path)}"
        page_token: str | None = None
        while True:
            params = [("pageSize", str(_LIST_PAGE_SIZE))]
            if page_token:
                params.append(("pageToken", page_token))
            out = await _request_async(
                self._client.http,
                url,
                params=params,
                access_token=await self._client.get_token(),
            )
            if not out:
                return
            for doc in out.get("documents", []):
                name = doc.get("name", "")
                doc_id = name.split("/")[-1] if name else ""
                yield DocumentSnapshot(doc_id, decode_document(doc))
            page_token = out.get("nextPageToken")
            if not page_token:
                return


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        token_provider: TokenProvider,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._token_provider = token_provider
        self.base_url = f"{FIRESTORE_BASE_URL}/projects/{project_id}/databases/(default)/documents"
        self.http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self.http.aclose()

    async def get_token(self) -> str | None:
        """Return the bearer token for the next request (None for unauthenticated access)."""
        return await self._token_provider()

    def collection(self, path: str) -> CollectionReference:
        return CollectionReference(self, path)

    def document(self, path: str) -> DocumentReference:
        return DocumentReference(self, path.strip("/"))
