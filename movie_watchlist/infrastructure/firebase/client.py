"""Firebase wiring: identity gateway + Firestore document store.

Both talk REST over one shared httpx.AsyncClient. Firestore requests are
authorized with the gateway's current ID token, so the store only works for
the signed-in user (per-user security rules apply).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from movie_watchlist.core.config import Settings
from movie_watchlist.infrastructure.firebase._rest_client import FirestoreRESTClient
from movie_watchlist.infrastructure.firebase._token_verifier import FirebaseTokenVerifier
from movie_watchlist.infrastructure.firebase.document_store import FirestoreDocumentStore
from movie_watchlist.infrastructure.firebase.identity_toolkit import FirebaseIdentityGateway

logger = logging.getLogger(__name__)


@dataclass
class FirebaseServices:
    """Identity gateway and document store for one Firebase project."""

    identity: FirebaseIdentityGateway
    store: FirestoreDocumentStore
    firestore: FirestoreRESTClient

    async def aclose(self) -> None:
        await self.firestore.aclose()
        await self.identity.aclose()


def init_firebase(settings: Settings, http_client: httpx.AsyncClient) -> FirebaseServices:
    """Build the Firebase collaborators from settings.

    Uses FIREBASE_API_KEY for the identity service and FIREBASE_PROJECT_ID for
    Firestore and token verification (when FIREBASE_VERIFY_ID_TOKENS is true).
    """
    verifier = (
        FirebaseTokenVerifier(settings.firebase_project_id)
        if settings.firebase_verify_id_tokens
        else None
    )
    identity = FirebaseIdentityGateway(
        settings.firebase_api_key.get_secret_value(),
        http_client=http_client,
        token_verifier=verifier,
    )
    firestore = FirestoreRESTClient(
        settings.firebase_project_id,
        identity.get_id_token,
        http_client=http_client,
    )
    store = FirestoreDocumentStore(
        firestore,
        poll_interval_seconds=settings.store_poll_interval_seconds,
    )
    logger.info(
        "Firebase initialized for project %s (token verification %s)",
        settings.firebase_project_id,
        "on" if verifier else "off",
    )
    return FirebaseServices(identity=identity, store=store, firestore=firestore)
