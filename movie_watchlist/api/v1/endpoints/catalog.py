"""Catalog endpoints: search and popular listing, annotated with saved status."""

from fastapi import APIRouter, Depends, Query

from movie_watchlist.api.v1.dependencies import command_response, get_home, require_identity
from movie_watchlist.application.use_cases.home import HomeViewModel
from movie_watchlist.domain.enums import ResultsTab
from movie_watchlist.schemas.movie import MovieListResponse, MovieRowResponse

router = APIRouter(dependencies=[Depends(require_identity)])


def _search_rows(home: HomeViewModel) -> MovieListResponse:
    return MovieListResponse(
        tab=ResultsTab.SEARCH.value,
        items=[MovieRowResponse.from_row(r) for r in home.rows(ResultsTab.SEARCH)],
    )


@router.get("/search", response_model=MovieListResponse)
async def search(q: str = Query("", description="Search term"), home: HomeViewModel = Depends(get_home)):
    """Search the catalog; an empty term gives no results and no request."""
    notice = await home.search(q)
    if notice is not None:
        return command_response(notice)
    return _search_rows(home)


@router.get("/popular", response_model=MovieListResponse)
async def popular(home: HomeViewModel = Depends(get_home)):
    notice = await home.load_popular()
    if notice is not None:
        return command_response(notice)
    return _search_rows(home)
