"""Application services: session, watchlist, account deletion."""

from movie_watchlist.application.services.account_deletion import AccountDeletionWorkflow
from movie_watchlist.application.services.session_controller import SessionController
from movie_watchlist.application.services.watchlist_service import WatchlistService

__all__ = [
    "AccountDeletionWorkflow",
    "SessionController",
    "WatchlistService",
]
