"""Pydantic request/response schemas for the API."""

from movie_watchlist.schemas.account import AccountDeleteRequest, AccountDeleteResponse
from movie_watchlist.schemas.auth import (
    FederatedSignInRequest,
    PasswordResetRequest,
    SignInRequest,
    SignUpRequest,
)
from movie_watchlist.schemas.health import HealthResponse
from movie_watchlist.schemas.movie import MovieListResponse, MovieRowResponse, MovieSaveRequest
from movie_watchlist.schemas.notice import CommandResponse, NoticeListResponse, NoticeResponse
from movie_watchlist.schemas.session import IdentityResponse, SessionResponse

__all__ = [
    "AccountDeleteRequest",
    "AccountDeleteResponse",
    "CommandResponse",
    "FederatedSignInRequest",
    "HealthResponse",
    "IdentityResponse",
    "MovieListResponse",
    "MovieRowResponse",
    "MovieSaveRequest",
    "NoticeListResponse",
    "NoticeResponse",
    "PasswordResetRequest",
    "SessionResponse",
    "SignInRequest",
    "SignUpRequest",
]
