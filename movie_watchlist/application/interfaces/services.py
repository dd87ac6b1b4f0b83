"""Service interfaces (ports) for the application layer.

Protocols define contracts the view layer fulfills for interactive workflows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from movie_watchlist.application.dtos.identity import FederatedCredential


# Account deletion prompter interface
class IDeletionPrompter(Protocol):
    """Protocol for the blocking questions asked during account deletion."""

    async def confirm_deletion(self) -> bool:
        """Ask the user to confirm; False abandons deletion with no side effects."""

    async def prompt_password(self) -> str | None:
        """Ask for the account password; None or empty means cancelled."""

    async def federated_challenge(self) -> FederatedCredential | None:
        """Run the federated reauthentication challenge; None means it did not complete."""
