"""DTOs for catalog entries and saved movies."""

from dataclasses import dataclass
from datetime import datetime

from movie_watchlist.domain.enums import WatchStatus


@dataclass(frozen=True)
class CatalogEntry:
    """One normalized catalog search/listing result. Never persisted."""

    id: int
    title: str
    release_year: int | None = None
    poster_path: str | None = None


@dataclass(frozen=True)
class MovieUpsert:
    """Payload for WatchlistService.upsert.

    created_at is passed back when the caller already holds the saved record.
    """

    id: str
    title: str
    status: WatchStatus
    year: int | None = None
    poster_path: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_entry(cls, entry: CatalogEntry, status: WatchStatus) -> "MovieUpsert":
        return cls(
            id=str(entry.id),
            title=entry.title,
            status=status,
            year=entry.release_year,
            poster_path=entry.poster_path,
        )


@dataclass(frozen=True)
class SavedMovie:
    """Read-only projection of a saved movie document (users/{uid}/movies/{id})."""

    id: str
    title: str
    status: WatchStatus
    year: int | None = None
    poster_path: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class StoredDocument:
    """Raw document as returned by the document store (id + decoded fields)."""

    id: str
    data: dict
