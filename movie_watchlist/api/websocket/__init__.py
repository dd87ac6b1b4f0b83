"""WebSocket connection manager and view snapshots.

Used by the WebSocket endpoint and the lifespan to push view changes.
"""

from movie_watchlist.api.websocket.manager import ConnectionManager

__all__ = ["ConnectionManager"]
