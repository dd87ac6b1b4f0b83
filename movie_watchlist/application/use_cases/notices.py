"""Conversion of collaborator errors into user-visible notices.

Command handlers catch WatchlistException and hand it here; the notice text
depends on the error kind only, except auth errors whose message is shown
verbatim.
"""

from movie_watchlist.application.dtos.notice import Notice, NoticeLevel
from movie_watchlist.core.constants import SIGN_OUT_AND_BACK_IN_MESSAGE
from movie_watchlist.domain.enums import ErrorKind
from movie_watchlist.domain.exceptions import WatchlistException

_GENERIC_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.CATALOG: "Search failed. Please try again.",
    ErrorKind.STORE: "Could not update your lists. Please try again.",
    ErrorKind.REAUTH_REQUIRED: SIGN_OUT_AND_BACK_IN_MESSAGE,
}


def notice_from_error(exc: WatchlistException, message: str | None = None) -> Notice:
    """Error notice for exc; `message` overrides the generic text for catalog/store errors."""
    if exc.kind in (ErrorKind.AUTH, ErrorKind.VALIDATION):
        text = exc.message
    else:
        text = message or _GENERIC_MESSAGES[exc.kind]
    return Notice(text, NoticeLevel.ERROR, exc.kind)


def info(message: str) -> Notice:
    return Notice(message, NoticeLevel.INFO)
