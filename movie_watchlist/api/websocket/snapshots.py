"""JSON snapshots of the local view pushed over WebSocket."""

from typing import Any

from movie_watchlist.application.use_cases.home import EVENT_MOVIES, EVENT_RESULTS, EVENT_SESSION
from movie_watchlist.core.context import ClientContext
from movie_watchlist.domain.enums import ResultsTab
from movie_watchlist.schemas.movie import MovieRowResponse
from movie_watchlist.schemas.session import SessionResponse


def session_snapshot(context: ClientContext) -> dict[str, Any]:
    home = context.home
    return {
        "event": EVENT_SESSION,
        "session": SessionResponse.from_session(home.session, home.route).model_dump(mode="json"),
    }


def rows_snapshot(context: ClientContext, event: str, tabs: list[ResultsTab]) -> dict[str, Any]:
    home = context.home
    return {
        "event": event,
        "tabs": {
            tab.value: [MovieRowResponse.from_row(r).model_dump(mode="json") for r in home.rows(tab)]
            for tab in tabs
        },
    }


def snapshot_for_event(context: ClientContext, event: str) -> dict[str, Any]:
    """Snapshot of the part of the view that event changed."""
    if event == EVENT_SESSION:
        return session_snapshot(context)
    if event == EVENT_MOVIES:
        # Saved statuses also annotate search results
        return rows_snapshot(context, event, list(ResultsTab))
    if event == EVENT_RESULTS:
        return rows_snapshot(context, event, [ResultsTab.SEARCH])
    return {"event": event}
