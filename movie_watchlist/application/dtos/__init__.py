"""DTOs for identity, movies, and notices (no dependency on external services)."""

from movie_watchlist.application.dtos.identity import (
    FederatedCredential,
    Identity,
    Session,
)
from movie_watchlist.application.dtos.movie import (
    CatalogEntry,
    MovieUpsert,
    SavedMovie,
    StoredDocument,
)
from movie_watchlist.application.dtos.notice import (
    DeletionOutcome,
    Notice,
    NoticeLevel,
)

__all__ = [
    "CatalogEntry",
    "DeletionOutcome",
    "FederatedCredential",
    "Identity",
    "MovieUpsert",
    "Notice",
    "NoticeLevel",
    "SavedMovie",
    "Session",
    "StoredDocument",
]
