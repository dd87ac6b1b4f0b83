"""Firebase integration: Authentication REST gateway and Firestore REST store."""

from movie_watchlist.infrastructure.firebase.client import (
    FirebaseServices,
    init_firebase,
)
from movie_watchlist.infrastructure.firebase.document_store import FirestoreDocumentStore
from movie_watchlist.infrastructure.firebase.identity_toolkit import FirebaseIdentityGateway

__all__ = [
    "FirebaseIdentityGateway",
    "FirebaseServices",
    "FirestoreDocumentStore",
    "init_firebase",
]
