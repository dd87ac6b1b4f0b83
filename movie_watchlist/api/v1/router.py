"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from movie_watchlist.api.v1.dependencies.
"""

from fastapi import APIRouter

from movie_watchlist.api.v1.endpoints import (
    account,
    auth,
    catalog,
    health,
    movies,
    session,
    websocket as ws_endpoint,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(session.router, prefix="/session", tags=["session"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
api_router.include_router(movies.router, prefix="/movies", tags=["movies"])
api_router.include_router(account.router, prefix="/account", tags=["account"])
api_router.include_router(ws_endpoint.router, tags=["websocket"])
