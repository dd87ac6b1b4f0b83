"""FastAPI application entry point for the local view.

Wiring only: lifespan, exception handlers, CORS, routers and the root page.
See movie_watchlist.core.lifespan and movie_watchlist.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
optionally clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from movie_watchlist.api.v1.router import api_router
from movie_watchlist.core.config import get_settings
from movie_watchlist.core.context import ClientContext
from movie_watchlist.core.exception_handlers import register_exception_handlers
from movie_watchlist.core.lifespan import create_lifespan
from movie_watchlist.pages.root import render_root_page


def create_app(context: ClientContext | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Pass a prebuilt ClientContext to run against other collaborators (tests);
    otherwise the lifespan builds the Firebase + TMDB context from settings.
    """
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    app.state.client = context

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/", response_class=HTMLResponse)
    def root(request: Request) -> HTMLResponse:
        """Login screen when signed out, main screen when signed in, blank while loading."""
        home = request.app.state.client.home
        identity = home.identity
        return HTMLResponse(
            content=render_root_page(
                settings.app_name, home.route, identity.label if identity else None
            )
        )

    return app


app = create_app()
