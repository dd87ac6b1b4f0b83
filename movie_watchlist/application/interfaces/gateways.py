"""Collaborator interfaces (ports): identity gateway, document store, catalog.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol

from movie_watchlist.domain.enums import PosterSize

if TYPE_CHECKING:
    from movie_watchlist.application.dtos.identity import FederatedCredential, Identity
    from movie_watchlist.application.dtos.movie import CatalogEntry, StoredDocument
    from movie_watchlist.domain.exceptions import StoreError
    from movie_watchlist.shared.subscription import Subscription

IdentityListener = Callable[["Identity | None"], None]
SnapshotListener = Callable[[list["StoredDocument"]], None]
StoreErrorListener = Callable[["StoreError"], None]


# Identity gateway interface
class IIdentityGateway(Protocol):
    """Protocol for the external identity service (sign-in, reauth, deletion)."""

    @property
    def current_identity(self) -> Identity | None:
        """Identity of the signed-in account, or None."""

    async def sign_in_with_password(self, email: str, password: str) -> Identity:
        """Sign in with email/password. Raises AuthError on bad credentials."""

    async def sign_up_with_password(self, email: str, password: str) -> Identity:
        """Create an account and sign in. Raises AuthError (email in use, weak password)."""

    async def sign_in_federated(self, credential: FederatedCredential) -> Identity:
        """Sign in with a federated provider credential."""

    async def sign_out(self) -> None:
        """Forget the current identity (notifies listeners with None)."""

    async def send_password_reset(self, email: str) -> None:
        """Ask the identity service to email a password reset link."""

    async def delete_current_identity(self) -> None:
        """Delete the signed-in account. Raises ReauthRequiredError when the sign-in is stale."""

    async def reauthenticate_with_password(self, password: str) -> None:
        """Refresh the sign-in of the current account with its password."""

    async def reauthenticate_federated(self, credential: FederatedCredential) -> None:
        """Refresh the sign-in of the current account with a federated credential."""

    def ensure_recent_sign_in(self) -> None:
        """Raise ReauthRequiredError when the current sign-in is older than the recent-login window."""

    async def get_id_token(self) -> str | None:
        """Return a valid ID token for the current identity (refreshing if needed), or None."""

    def on_identity_state_change(self, callback: IdentityListener) -> Callable[[], None]:
        """Register for identity changes; callback is invoked once with the current
        identity, then on every sign-in/sign-out. Returns an unsubscribe function."""


# Document store interface
class IDocumentStore(Protocol):
    """Protocol for the external per-user document store.

    Paths are slash-separated, e.g. users/{userId}/movies/{externalId}.
    All failures raise StoreError.
    """

    async def write_merge(self, path: str, fields: dict[str, Any]) -> None:
        """Create the document or merge the given fields into it."""

    async def get(self, path: str) -> dict[str, Any] | None:
        """Return decoded document fields, or None if missing."""

    async def delete(self, path: str) -> None:
        """Delete the document. Missing documents are not an error."""

    async def list_children(self, path: str) -> list[StoredDocument]:
        """Return every document in the collection at path."""

    def subscribe_collection(
        self,
        path: str,
        on_snapshot: SnapshotListener,
        on_error: StoreErrorListener | None = None,
    ) -> Subscription:
        """Deliver the full collection on initial load and on every change, in order."""


# Catalog client interface
class ICatalogClient(Protocol):
    """Protocol for the movie catalog (search, popular listing, poster URLs)."""

    async def search(self, term: str) -> list[CatalogEntry]:
        """Search by keyword; empty/whitespace terms return [] without a request."""

    async def list_popular(self) -> list[CatalogEntry]:
        """First page of the popular listing."""

    def poster_url(self, path: str | None, size: PosterSize = PosterSize.MEDIUM) -> str | None:
        """Image CDN URL for a poster path, or None when there is no poster."""
