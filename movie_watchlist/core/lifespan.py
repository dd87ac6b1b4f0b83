"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of the client context, the shared HTTP
client and the WebSocket manager.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from movie_watchlist.core.config import get_settings
from movie_watchlist.core.context import build_context
from movie_watchlist.shared.logging import setup_logging

logger = logging.getLogger(__name__)


def attach_view_broadcasts(app: FastAPI) -> None:
    """Push view changes (session, movies, results) to connected WebSockets."""
    from movie_watchlist.api.websocket.snapshots import snapshot_for_event

    context = app.state.client
    manager = app.state.ws_manager

    def on_change(event: str) -> None:
        manager.publish(snapshot_for_event(context, event))

    app.state.view_subscription = context.home.subscribe(on_change)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: WebSocket manager, shared HTTP client, client context
    (unless one was injected by create_app), activation, view broadcasts.
    Shutdown order: view broadcasts, client context, HTTP client.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()
    from movie_watchlist.api.websocket import ConnectionManager

    app.state.ws_manager = ConnectionManager()

    http_client: httpx.AsyncClient | None = None
    if getattr(app.state, "client", None) is None:
        http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
        app.state.client = build_context(settings, http_client)
        logger.info("Client context built")
    app.state.client.activate()
    attach_view_broadcasts(app)

    yield

    # ---- Shutdown ----
    subscription = getattr(app.state, "view_subscription", None)
    if subscription is not None:
        subscription.cancel()
        app.state.view_subscription = None
    await app.state.client.aclose()
    logger.info("Client context closed")
    if http_client is not None:
        await http_client.aclose()
        logger.info("HTTP client closed")
