"""FastAPI dependencies for API v1.

Endpoints receive the client context, view models and the signed-in
identity from here; nothing is constructed inside an endpoint.
"""

from fastapi import Depends, Request
from fastapi.responses import JSONResponse

from movie_watchlist.application.dtos.identity import FederatedCredential, Identity
from movie_watchlist.application.dtos.notice import Notice
from movie_watchlist.application.use_cases.home import HomeViewModel
from movie_watchlist.application.use_cases.login import LoginViewModel
from movie_watchlist.core.context import ClientContext
from movie_watchlist.core.exception_handlers import status_for_kind
from movie_watchlist.domain.enums import AuthErrorReason
from movie_watchlist.domain.exceptions import AuthError
from movie_watchlist.schemas.notice import CommandResponse, NoticeResponse


def get_context(request: Request) -> ClientContext:
    """Client context built in lifespan (app.state.client)."""
    return request.app.state.client


def get_home(context: ClientContext = Depends(get_context)) -> HomeViewModel:
    return context.home


def get_login(context: ClientContext = Depends(get_context)) -> LoginViewModel:
    return context.login


def require_identity(home: HomeViewModel = Depends(get_home)) -> Identity:
    """Signed-in identity; 401 when signed out (or still loading)."""
    identity = home.identity
    if identity is None:
        raise AuthError("You are not signed in.", AuthErrorReason.NOT_SIGNED_IN)
    return identity


def command_response(notice: Notice | None) -> JSONResponse:
    """200 with an optional info notice, or the kind's status for an error notice."""
    body = CommandResponse(
        ok=notice is None or not notice.is_error,
        notice=NoticeResponse.from_notice(notice) if notice else None,
    )
    status = status_for_kind(notice.kind) if notice and notice.is_error else 200
    return JSONResponse(status_code=status, content=body.model_dump(mode="json"))


class RequestDeletionPrompter:
    """Answers the deletion workflow's prompts from a request body."""

    def __init__(
        self,
        confirmed: bool,
        password: str | None = None,
        federated_id_token: str | None = None,
    ) -> None:
        self._confirmed = confirmed
        self._password = password
        self._federated_id_token = federated_id_token

    async def confirm_deletion(self) -> bool:
        return self._confirmed

    async def prompt_password(self) -> str | None:
        return self._password

    async def federated_challenge(self) -> FederatedCredential | None:
        if not self._federated_id_token:
            return None
        return FederatedCredential(id_token=self._federated_id_token)
