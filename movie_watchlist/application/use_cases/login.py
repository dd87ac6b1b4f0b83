"""Login screen view model: sign in, sign up, federated sign-in, password reset."""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from enum import Enum

from movie_watchlist.application.dtos.identity import FederatedCredential
from movie_watchlist.application.dtos.notice import Notice
from movie_watchlist.application.interfaces.gateways import IIdentityGateway
from movie_watchlist.application.use_cases.notices import info, notice_from_error
from movie_watchlist.domain.exceptions import ValidationException, WatchlistException

logger = logging.getLogger(__name__)


class LoginMode(str, Enum):
    SIGN_IN = "signin"
    SIGN_UP = "signup"


class LoginViewModel:
    """Form state of the login screen. A successful sign-in changes the session,
    which moves navigation to the home screen; nothing else is needed here."""

    def __init__(self, gateway: IIdentityGateway) -> None:
        self._gateway = gateway
        self.mode = LoginMode.SIGN_IN
        self.notice: Notice | None = None
        self.submitting = False

    def switch_mode(self, mode: LoginMode) -> None:
        self.mode = mode
        self.notice = None

    async def submit(
        self, email: str, password: str, password_confirm: str | None = None
    ) -> Notice | None:
        """Sign in or sign up depending on mode."""
        self.notice = None
        if self.mode is LoginMode.SIGN_UP and password != password_confirm:
            self.notice = notice_from_error(
                ValidationException("Passwords do not match", field="password_confirm")
            )
            return self.notice
        if self.mode is LoginMode.SIGN_IN:
            call = self._gateway.sign_in_with_password(email, password)
        else:
            call = self._gateway.sign_up_with_password(email, password)
        return await self._run(call)

    async def sign_in_federated(self, credential: FederatedCredential) -> Notice | None:
        self.notice = None
        return await self._run(self._gateway.sign_in_federated(credential))

    async def reset_password(self, email: str) -> Notice:
        """Send a reset email; requires an email address in the form."""
        if not email or not email.strip():
            self.notice = notice_from_error(
                ValidationException("Enter your email first", field="email")
            )
            return self.notice
        try:
            await self._gateway.send_password_reset(email.strip())
        except WatchlistException as exc:
            self.notice = notice_from_error(exc)
        else:
            self.notice = info("Password reset email sent")
        return self.notice

    async def _run(self, call: Awaitable[object]) -> Notice | None:
        self.submitting = True
        try:
            await call
        except WatchlistException as exc:
            logger.info("Sign-in attempt failed: %s", exc.error_code)
            self.notice = notice_from_error(exc)
        finally:
            self.submitting = False
        return self.notice
