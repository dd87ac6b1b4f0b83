"""Account deletion workflow (state machine).

IDLE → CONFIRM_PENDING → DELETING → SUCCESS
                                  ↘ FAILURE
                                  ↘ REAUTH_REQUIRED → REAUTH_PENDING → RETRYING → SUCCESS | FAILURE

Saved movies are purged before the identity is removed, never after. A stale
sign-in triggers exactly one reauthentication and one retry; a second failure
of any kind is terminal.
"""

from __future__ import annotations

import logging

from movie_watchlist.application.dtos.identity import Identity
from movie_watchlist.application.dtos.notice import DeletionOutcome, Notice, NoticeLevel
from movie_watchlist.application.interfaces.gateways import IIdentityGateway
from movie_watchlist.application.interfaces.services import IDeletionPrompter
from movie_watchlist.application.services.watchlist_service import WatchlistService
from movie_watchlist.core.constants import SIGN_OUT_AND_BACK_IN_MESSAGE
from movie_watchlist.domain.enums import AuthErrorReason, DeletionState, SignInProvider
from movie_watchlist.domain.exceptions import (
    AuthError,
    ReauthRequiredError,
    ValidationException,
    WatchlistException,
)

logger = logging.getLogger(__name__)


class AccountDeletionWorkflow:
    """Runs one account deletion at a time for the signed-in identity."""

    def __init__(self, gateway: IIdentityGateway, watchlist: WatchlistService) -> None:
        self._gateway = gateway
        self._watchlist = watchlist
        self._state = DeletionState.IDLE
        self._transitions: list[DeletionState] = []

    @property
    def state(self) -> DeletionState:
        return self._state

    @property
    def in_progress(self) -> bool:
        return self._state not in (DeletionState.IDLE, DeletionState.SUCCESS, DeletionState.FAILURE)

    def _move(self, state: DeletionState) -> None:
        logger.debug("Account deletion: %s -> %s", self._state.value, state.value)
        self._state = state
        self._transitions.append(state)

    def _finish(self, state: DeletionState, notice: Notice | None = None) -> DeletionOutcome:
        self._move(state)
        if state is DeletionState.SUCCESS:
            logger.info("Account deletion completed")
        elif state is DeletionState.FAILURE:
            logger.warning("Account deletion failed: %s", notice.message if notice else "")
        return DeletionOutcome(state=state, notice=notice, transitions=tuple(self._transitions))

    async def _purge_and_delete(self, user_id: str) -> None:
        # Fail before touching data when the sign-in is already too old to delete the identity.
        self._gateway.ensure_recent_sign_in()
        await self._watchlist.delete_all(user_id)
        await self._gateway.delete_current_identity()

    async def run(self, identity: Identity, prompter: IDeletionPrompter) -> DeletionOutcome:
        """Ask, delete, reauthenticate once if needed, and report where it ended."""
        if self.in_progress:
            raise ValidationException("Account deletion is already in progress")
        self._transitions = []
        self._state = DeletionState.IDLE
        try:
            return await self._run(identity, prompter)
        except Exception:
            self._move(DeletionState.FAILURE)
            raise

    async def _run(self, identity: Identity, prompter: IDeletionPrompter) -> DeletionOutcome:
        self._move(DeletionState.CONFIRM_PENDING)
        if not await prompter.confirm_deletion():
            return self._finish(DeletionState.IDLE)

        self._move(DeletionState.DELETING)
        try:
            await self._purge_and_delete(identity.uid)
        except ReauthRequiredError:
            self._move(DeletionState.REAUTH_REQUIRED)
        except WatchlistException as exc:
            return self._finish(DeletionState.FAILURE, _error_notice(exc))
        else:
            return self._finish(DeletionState.SUCCESS)

        return await self._reauthenticate_and_retry(identity, prompter)

    async def _reauthenticate_and_retry(
        self, identity: Identity, prompter: IDeletionPrompter
    ) -> DeletionOutcome:
        if identity.has_provider(SignInProvider.FEDERATED):
            self._move(DeletionState.REAUTH_PENDING)
            credential = await prompter.federated_challenge()
            if credential is None:
                return self._finish(
                    DeletionState.FAILURE,
                    _error_notice(
                        AuthError(
                            "Google re-authentication was cancelled.",
                            AuthErrorReason.FEDERATED_CANCELLED,
                        )
                    ),
                )
            reauthenticate = self._gateway.reauthenticate_federated(credential)
        elif identity.has_provider(SignInProvider.PASSWORD):
            self._move(DeletionState.REAUTH_PENDING)
            password = await prompter.prompt_password()
            if not password:
                logger.info("Account deletion abandoned at password prompt")
                return self._finish(DeletionState.IDLE)
            reauthenticate = self._gateway.reauthenticate_with_password(password)
        else:
            return self._finish(DeletionState.IDLE, Notice(SIGN_OUT_AND_BACK_IN_MESSAGE))

        try:
            await reauthenticate
        except WatchlistException as exc:
            return self._finish(DeletionState.FAILURE, _error_notice(exc))

        self._move(DeletionState.RETRYING)
        try:
            await self._purge_and_delete(identity.uid)
        except ReauthRequiredError as exc:
            return self._finish(
                DeletionState.FAILURE,
                Notice(SIGN_OUT_AND_BACK_IN_MESSAGE, NoticeLevel.ERROR, exc.kind),
            )
        except WatchlistException as exc:
            return self._finish(DeletionState.FAILURE, _error_notice(exc))
        return self._finish(DeletionState.SUCCESS)


def _error_notice(exc: WatchlistException) -> Notice:
    return Notice(exc.message, NoticeLevel.ERROR, exc.kind)
