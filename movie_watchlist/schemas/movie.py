"""Catalog and saved-movie API schemas."""

from pydantic import BaseModel, Field

from movie_watchlist.application.use_cases.home import MovieRow
from movie_watchlist.domain.enums import WatchStatus


class MovieRowResponse(BaseModel):
    """One row of a tab, with poster URL and saved status (None when unsaved)."""

    id: str
    title: str
    year: int | None = None
    poster_url: str | None = None
    status: WatchStatus | None = None

    @classmethod
    def from_row(cls, row: MovieRow) -> "MovieRowResponse":
        return cls(
            id=row.id,
            title=row.title,
            year=row.year,
            poster_url=row.poster_url,
            status=row.status,
        )


class MovieListResponse(BaseModel):
    tab: str
    items: list[MovieRowResponse]


class MovieSaveRequest(BaseModel):
    """Request body for PUT /movies/{movie_id}.

    title is required when the movie is not saved yet; an already saved
    movie only changes status.
    """

    status: WatchStatus
    title: str | None = Field(None, min_length=1)
    year: int | None = None
    poster_path: str | None = None
