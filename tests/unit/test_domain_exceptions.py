"""Tests for domain exceptions (error_code, kind, message, details)."""

from movie_watchlist.domain.enums import AuthErrorReason, ErrorKind
from movie_watchlist.domain.exceptions import (
    AuthError,
    CatalogError,
    ReauthRequiredError,
    StoreError,
    ValidationException,
    WatchlistException,
)


def test_watchlist_exception_default_error_code() -> None:
    """Base WatchlistException uses class name as error_code when not provided."""
    exc = WatchlistException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "WatchlistException"
    assert exc.details == {}


def test_watchlist_exception_custom_error_code_and_details() -> None:
    exc = WatchlistException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.error_code == "CUSTOM"
    assert exc.details == {"key": "value"}
    assert str(exc) == "Oops"


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Passwords do not match", field="password_confirm")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.kind is ErrorKind.VALIDATION
    assert exc.details == {"field": "password_confirm"}


def test_validation_exception_without_field() -> None:
    exc = ValidationException("Invalid")
    assert exc.details == {}


def test_auth_error_defaults() -> None:
    """AuthError has a default message and UNKNOWN reason."""
    exc = AuthError()
    assert exc.message == "Authentication failed"
    assert exc.reason is AuthErrorReason.UNKNOWN
    assert exc.kind is ErrorKind.AUTH
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_auth_error_reason_in_details() -> None:
    exc = AuthError("Invalid email or password.", AuthErrorReason.INVALID_CREDENTIALS)
    assert exc.details == {"reason": "invalid_credentials"}


def test_reauth_required_error() -> None:
    exc = ReauthRequiredError()
    assert exc.kind is ErrorKind.REAUTH_REQUIRED
    assert exc.error_code == "REAUTH_REQUIRED"


def test_catalog_error_carries_status_code() -> None:
    """CatalogError keeps the HTTP status as attribute and in details."""
    exc = CatalogError("TMDB error: 401", status_code=401)
    assert exc.status_code == 401
    assert exc.details == {"status_code": 401}
    assert exc.kind is ErrorKind.CATALOG


def test_store_error_details() -> None:
    exc = StoreError("Document store returned HTTP 403", status_code=403, path="users/u1/movies")
    assert exc.details == {"status_code": 403, "path": "users/u1/movies"}
    assert exc.kind is ErrorKind.STORE


def test_store_error_without_status() -> None:
    """Transport failures have no status code."""
    exc = StoreError("Document store request failed")
    assert exc.status_code is None
    assert exc.details == {}


def test_to_dict() -> None:
    """to_dict() is the JSON body used by the exception handlers."""
    exc = CatalogError("TMDB error: 500", status_code=500)
    assert exc.to_dict() == {
        "error": "CATALOG_ERROR",
        "kind": "catalog",
        "message": "TMDB error: 500",
        "details": {"status_code": 500},
    }
