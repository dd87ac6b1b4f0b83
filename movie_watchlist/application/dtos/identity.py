"""DTOs for identity and session state (no dependency on the identity service)."""

from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import urlencode

from movie_watchlist.domain.enums import SignInProvider


@dataclass(frozen=True)
class Identity:
    """Signed-in account as reported by the identity gateway.

    uid is immutable for the account's lifetime. providers is ordered and
    de-duplicated. signed_in_at is when the current credential was obtained
    (None when unknown).
    """

    uid: str
    email: str | None = None
    display_name: str | None = None
    providers: tuple[SignInProvider, ...] = ()
    signed_in_at: datetime | None = None

    @property
    def label(self) -> str:
        """Email, else display name, else uid (what the main screen shows)."""
        return self.email or self.display_name or self.uid

    def has_provider(self, provider: SignInProvider) -> bool:
        return provider in self.providers


@dataclass(frozen=True)
class Session:
    """Current identity (or none) plus loading flag. Owned by SessionController."""

    identity: Identity | None = None
    loading: bool = True

    @property
    def signed_in(self) -> bool:
        return self.identity is not None


@dataclass(frozen=True)
class FederatedCredential:
    """Credential obtained from a federated provider (e.g. a Google ID token)."""

    id_token: str | None = None
    access_token: str | None = None
    provider: SignInProvider = field(default=SignInProvider.FEDERATED)

    def post_body(self) -> str:
        """Form-encoded body expected by the identity service's signInWithIdp."""
        params = {"providerId": self.provider.value}
        if self.id_token:
            params["id_token"] = self.id_token
        if self.access_token:
            params["access_token"] = self.access_token
        return urlencode(params)
