"""Domain exceptions for the movie watchlist client.

Every error surfaced to the user derives from WatchlistException and carries
a closed ErrorKind tag. Callers branch on the exception type, the kind, or
AuthErrorReason; never on message text. The view models convert these into
transient notices; the HTTP layer maps them to responses in exception handlers.
"""

from typing import Any

from movie_watchlist.domain.enums import AuthErrorReason, ErrorKind


class WatchlistException(Exception):
    """Base exception for all watchlist client errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. status_code, path).
    """

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serializable form used by the HTTP exception handlers."""
        return {
            "error": self.error_code,
            "kind": self.kind.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(WatchlistException):
    """Raised when client-side input validation fails (e.g. password mismatch)."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthError(WatchlistException):
    """Raised when the identity gateway rejects a call.

    The message is safe to show to the user verbatim.
    """

    kind = ErrorKind.AUTH

    def __init__(
        self,
        message: str = "Authentication failed",
        reason: AuthErrorReason = AuthErrorReason.UNKNOWN,
    ) -> None:
        self.reason = reason
        super().__init__(message, "AUTHENTICATION_ERROR", {"reason": reason.value})


class ReauthRequiredError(WatchlistException):
    """Raised when a sensitive operation needs a fresh sign-in.

    Drives the reauthentication sub-flow of account deletion; never shown raw.
    """

    kind = ErrorKind.REAUTH_REQUIRED

    def __init__(self, message: str = "Recent sign-in required") -> None:
        super().__init__(message, "REAUTH_REQUIRED")


class CatalogError(WatchlistException):
    """Raised when the movie catalog answers with a non-success status."""

    kind = ErrorKind.CATALOG

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        details = {"status_code": status_code} if status_code is not None else {}
        super().__init__(message, "CATALOG_ERROR", details)


class StoreError(WatchlistException):
    """Raised when a document store write, delete, read or subscription fails."""

    kind = ErrorKind.STORE

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        path: str | None = None,
    ) -> None:
        self.status_code = status_code
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if path:
            details["path"] = path
        super().__init__(message, "STORE_ERROR", details)
