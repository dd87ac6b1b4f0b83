"""Client composition root: builds collaborators, services and view models.

One ClientContext per running client (one signed-in user at a time). The
lifespan builds it from settings; tests build it from fakes with
ClientContext.from_collaborators().
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

import httpx

from movie_watchlist.application.interfaces.gateways import (
    ICatalogClient,
    IDocumentStore,
    IIdentityGateway,
)
from movie_watchlist.application.services.account_deletion import AccountDeletionWorkflow
from movie_watchlist.application.services.session_controller import SessionController
from movie_watchlist.application.services.watchlist_service import WatchlistService
from movie_watchlist.application.use_cases.home import HomeViewModel
from movie_watchlist.application.use_cases.login import LoginViewModel
from movie_watchlist.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class ClientContext:
    """Everything one running client owns, with explicit activate/aclose."""

    gateway: IIdentityGateway
    store: IDocumentStore
    catalog: ICatalogClient
    session: SessionController
    watchlist: WatchlistService
    deletion: AccountDeletionWorkflow
    home: HomeViewModel
    login: LoginViewModel
    closers: list[Callable[[], Awaitable[None]]] = field(default_factory=list)

    @classmethod
    def from_collaborators(
        cls,
        gateway: IIdentityGateway,
        store: IDocumentStore,
        catalog: ICatalogClient,
    ) -> ClientContext:
        session = SessionController(gateway)
        watchlist = WatchlistService(store)
        deletion = AccountDeletionWorkflow(gateway, watchlist)
        home = HomeViewModel(session, gateway, watchlist, catalog, deletion)
        return cls(
            gateway=gateway,
            store=store,
            catalog=catalog,
            session=session,
            watchlist=watchlist,
            deletion=deletion,
            home=home,
            login=LoginViewModel(gateway),
        )

    def activate(self) -> None:
        """Start following identity changes (must run on the event loop)."""
        self.session.activate()
        self.home.open()

    async def aclose(self) -> None:
        """Tear down view scope first, then close collaborators."""
        self.home.close()
        self.session.deactivate()
        for close in reversed(self.closers):
            await close()
        self.closers.clear()


def build_context(settings: Settings, http_client: httpx.AsyncClient) -> ClientContext:
    """Build the production context (Firebase + TMDB) over one shared HTTP client."""
    from movie_watchlist.infrastructure.external.tmdb import TmdbCatalogClient
    from movie_watchlist.infrastructure.firebase import init_firebase

    firebase = init_firebase(settings, http_client)
    catalog = TmdbCatalogClient(
        settings.tmdb_api_key.get_secret_value(),
        http_client=http_client,
        base_url=settings.tmdb_base_url,
        image_base_url=settings.tmdb_image_base_url,
        language=settings.tmdb_language,
    )
    context = ClientContext.from_collaborators(firebase.identity, firebase.store, catalog)
    context.closers.extend([firebase.aclose, catalog.aclose])
    return context
