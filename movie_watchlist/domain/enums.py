"""Domain enumerations for the movie watchlist client.

Enums represent fixed sets of domain values (list status, sign-in providers,
deletion workflow states, error kinds).
"""

from enum import Enum


class WatchStatus(str, Enum):
    """Which personal list a saved movie belongs to.

    Values are the strings stored in the document store.
    """

    TO_WATCH = "toWatch"
    WATCHED = "watched"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings."""
        return [status.value for status in cls]


class SignInProvider(str, Enum):
    """Provider linked to an identity (closed set used for reauthentication routing)."""

    PASSWORD = "password"
    FEDERATED = "google.com"
    OTHER = "other"

    @classmethod
    def from_provider_id(cls, provider_id: str | None) -> "SignInProvider":
        """Map an identity-provider id (e.g. 'password', 'google.com') to a member.

        Unrecognized ids map to OTHER so callers never branch on raw strings.
        """
        for member in (cls.PASSWORD, cls.FEDERATED):
            if provider_id == member.value:
                return member
        return cls.OTHER


class DeletionState(str, Enum):
    """States of the account deletion workflow."""

    IDLE = "idle"
    CONFIRM_PENDING = "confirm_pending"
    DELETING = "deleting"
    REAUTH_REQUIRED = "reauth_required"
    REAUTH_PENDING = "reauth_pending"
    RETRYING = "retrying"
    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def is_terminal(self) -> bool:
        return self in (DeletionState.SUCCESS, DeletionState.FAILURE)


class ErrorKind(str, Enum):
    """Closed tag for every error the client surfaces."""

    AUTH = "auth"
    REAUTH_REQUIRED = "reauth_required"
    CATALOG = "catalog"
    STORE = "store"
    VALIDATION = "validation"


class AuthErrorReason(str, Enum):
    """Why an identity call was rejected."""

    INVALID_CREDENTIALS = "invalid_credentials"
    EMAIL_IN_USE = "email_in_use"
    WEAK_PASSWORD = "weak_password"
    USER_DISABLED = "user_disabled"
    TOO_MANY_ATTEMPTS = "too_many_attempts"
    NOT_SIGNED_IN = "not_signed_in"
    USER_MISMATCH = "user_mismatch"
    INVALID_TOKEN = "invalid_token"
    FEDERATED_CANCELLED = "federated_cancelled"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


class ResultsTab(str, Enum):
    """Tabs of the main screen."""

    SEARCH = "search"
    TO_WATCH = "toWatch"
    WATCHED = "watched"


class PosterSize(str, Enum):
    """Image CDN size tokens for poster artwork."""

    SMALL = "w185"
    MEDIUM = "w342"
    LARGE = "w500"
    ORIGINAL = "original"
