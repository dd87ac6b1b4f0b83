"""Health check endpoint (liveness)."""

from fastapi import APIRouter

from movie_watchlist.core.config import get_settings
from movie_watchlist.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health():
    """Liveness: returns 200 when the app is running."""
    settings = get_settings()
    return HealthResponse(app=settings.app_name, version=settings.app_version)
