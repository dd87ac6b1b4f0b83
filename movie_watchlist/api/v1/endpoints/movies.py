"""Saved movie endpoints: list tabs, save or move, remove."""

from fastapi import APIRouter, Depends

from movie_watchlist.api.v1.dependencies import command_response, get_home, require_identity
from movie_watchlist.application.dtos.movie import CatalogEntry
from movie_watchlist.application.use_cases.home import HomeViewModel
from movie_watchlist.domain.enums import ResultsTab, WatchStatus
from movie_watchlist.domain.exceptions import ValidationException
from movie_watchlist.schemas.movie import MovieListResponse, MovieRowResponse, MovieSaveRequest
from movie_watchlist.schemas.notice import CommandResponse

router = APIRouter(dependencies=[Depends(require_identity)])

_TAB_BY_STATUS = {
    WatchStatus.TO_WATCH: ResultsTab.TO_WATCH,
    WatchStatus.WATCHED: ResultsTab.WATCHED,
}


@router.get("", response_model=MovieListResponse)
async def list_movies(
    status: WatchStatus | None = None, home: HomeViewModel = Depends(get_home)
):
    """Saved movies with the given status, or both lists when status is omitted."""
    if status is not None:
        tab = _TAB_BY_STATUS[status]
        return MovieListResponse(
            tab=tab.value, items=[MovieRowResponse.from_row(r) for r in home.rows(tab)]
        )
    rows = home.rows(ResultsTab.TO_WATCH) + home.rows(ResultsTab.WATCHED)
    return MovieListResponse(tab="all", items=[MovieRowResponse.from_row(r) for r in rows])


@router.put("/{movie_id}", response_model=CommandResponse)
async def save_movie(
    movie_id: int, body: MovieSaveRequest, home: HomeViewModel = Depends(get_home)
):
    """Add a movie to a list, or move an already saved one to body.status."""
    if body.title is None:
        if home.status_of(movie_id) is None:
            raise ValidationException("title is required for a movie that is not saved", field="title")
        return command_response(await home.set_status(str(movie_id), body.status))
    entry = CatalogEntry(
        id=movie_id, title=body.title, release_year=body.year, poster_path=body.poster_path
    )
    return command_response(await home.save(entry, body.status))


@router.delete("/{movie_id}", response_model=CommandResponse)
async def remove_movie(movie_id: int, home: HomeViewModel = Depends(get_home)):
    return command_response(await home.remove(str(movie_id)))
