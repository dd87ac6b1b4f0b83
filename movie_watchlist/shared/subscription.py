"""Explicit handle for live listeners (identity changes, collection snapshots).

Whoever opens a listener owns the returned Subscription and must cancel it
when its scope ends. cancel() releases the underlying listener exactly once;
further calls are no-ops.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType

logger = logging.getLogger(__name__)


class Subscription:
    """Cancellation handle with a single cancel() method.

    Also usable as a context manager so a scope releases it on exit:

        with watchlist.subscribe(uid, on_change):
            ...
    """

    def __init__(self, release: Callable[[], None] | None = None, name: str = "") -> None:
        self._release = release
        self._cancelled = False
        self.name = name

    @classmethod
    def inert(cls, name: str = "") -> Subscription:
        """Return an already-cancelled handle (nothing was opened)."""
        sub = cls(None, name)
        sub._cancelled = True
        return sub

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop further callbacks and release the listener (idempotent)."""
        if self._cancelled:
            return
        self._cancelled = True
        release, self._release = self._release, None
        if release is not None:
            release()
        logger.debug("Subscription released: %s", self.name or "<anonymous>")

    def __enter__(self) -> Subscription:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cancel()

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "active"
        return f"Subscription({self.name!r}, {state})"
