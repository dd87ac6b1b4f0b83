"""DTOs for transient user-visible notices and deletion outcomes."""

from dataclasses import dataclass, field
from enum import Enum

from movie_watchlist.domain.enums import DeletionState, ErrorKind


class NoticeLevel(str, Enum):
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """Message produced at a command-handler boundary (never an uncaught error)."""

    message: str
    level: NoticeLevel = NoticeLevel.INFO
    kind: ErrorKind | None = None

    @property
    def is_error(self) -> bool:
        return self.level is NoticeLevel.ERROR


@dataclass(frozen=True)
class DeletionOutcome:
    """Where an account deletion run ended, with the notice to show (if any)."""

    state: DeletionState
    notice: Notice | None = None
    transitions: tuple[DeletionState, ...] = field(default=())
