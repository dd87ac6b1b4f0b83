"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from movie_watchlist.domain.enums import (
    AuthErrorReason,
    DeletionState,
    ErrorKind,
    PosterSize,
    ResultsTab,
    SignInProvider,
    WatchStatus,
)
from movie_watchlist.domain.exceptions import (
    AuthError,
    CatalogError,
    ReauthRequiredError,
    StoreError,
    ValidationException,
    WatchlistException,
)

__all__ = [
    # Enums
    "AuthErrorReason",
    "DeletionState",
    "ErrorKind",
    "PosterSize",
    "ResultsTab",
    "SignInProvider",
    "WatchStatus",
    # Exceptions
    "AuthError",
    "CatalogError",
    "ReauthRequiredError",
    "StoreError",
    "ValidationException",
    "WatchlistException",
]
