"""Application interfaces (ports): collaborator and prompter protocols.

Define contracts for infrastructure and view implementations (DIP).
No runtime imports from movie_watchlist.infrastructure or movie_watchlist.api.
"""

from movie_watchlist.application.interfaces.gateways import (
    ICatalogClient,
    IDocumentStore,
    IdentityListener,
    IIdentityGateway,
    SnapshotListener,
    StoreErrorListener,
)
from movie_watchlist.application.interfaces.services import IDeletionPrompter

__all__ = [
    "ICatalogClient",
    "IDeletionPrompter",
    "IDocumentStore",
    "IIdentityGateway",
    "IdentityListener",
    "SnapshotListener",
    "StoreErrorListener",
]
