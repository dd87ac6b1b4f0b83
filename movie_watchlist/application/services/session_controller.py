"""Session controller: single owner of the current identity and loading flag."""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType

from movie_watchlist.application.dtos.identity import Identity, Session
from movie_watchlist.application.interfaces.gateways import IIdentityGateway
from movie_watchlist.shared.subscription import Subscription

logger = logging.getLogger(__name__)

SessionListener = Callable[[Session], None]


class SessionController:
    """Tracks identity-state notifications from the gateway.

    Starts as Session(identity=None, loading=True). The first notification
    (with or without an identity) clears loading; later ones replace the
    identity only. After deactivate() no further state changes are applied.
    Views read `state` and subscribe() for updates.
    """

    def __init__(self, gateway: IIdentityGateway) -> None:
        self._gateway = gateway
        self._state = Session()
        self._listeners: list[SessionListener] = []
        self._unsubscribe: Callable[[], None] | None = None
        self._torn_down = False

    @property
    def state(self) -> Session:
        return self._state

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    def activate(self) -> None:
        """Register with the gateway (idempotent). Must be called on the event loop."""
        if self._unsubscribe is not None:
            return
        self._torn_down = False
        self._unsubscribe = self._gateway.on_identity_state_change(self._on_identity)
        logger.debug("Session controller activated")

    def deactivate(self) -> None:
        """Unregister from the gateway; the state is frozen from here on."""
        self._torn_down = True
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()
            logger.debug("Session controller deactivated")

    def subscribe(self, listener: SessionListener) -> Subscription:
        """Call listener with every new Session value, in the order applied."""
        self._listeners.append(listener)

        def release() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Subscription(release, name="session")

    def _on_identity(self, identity: Identity | None) -> None:
        if self._torn_down:
            return
        previous = self._state
        self._state = Session(identity=identity, loading=False)
        if previous.loading:
            logger.info("Session ready (signed in: %s)", identity is not None)
        elif (previous.identity is None) != (identity is None):
            logger.info("Session changed (signed in: %s)", identity is not None)
        for listener in list(self._listeners):
            listener(self._state)

    def __enter__(self) -> SessionController:
        self.activate()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.deactivate()
