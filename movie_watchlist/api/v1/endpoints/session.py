"""Session endpoint: who is signed in and which screen to show."""

from fastapi import APIRouter, Depends

from movie_watchlist.api.v1.dependencies import get_home
from movie_watchlist.application.use_cases.home import HomeViewModel
from movie_watchlist.schemas.notice import NoticeListResponse, NoticeResponse
from movie_watchlist.schemas.session import SessionResponse

router = APIRouter()


@router.get("", response_model=SessionResponse)
async def get_session(home: HomeViewModel = Depends(get_home)):
    return SessionResponse.from_session(home.session, home.route)


@router.get("/notices", response_model=NoticeListResponse)
async def list_notices(home: HomeViewModel = Depends(get_home)):
    """Notices recorded by the main screen's commands and listeners, oldest first."""
    return NoticeListResponse(items=[NoticeResponse.from_notice(n) for n in home.notices])


@router.delete("/notices", status_code=204)
async def dismiss_notices(home: HomeViewModel = Depends(get_home)):
    home.dismiss_notices()
