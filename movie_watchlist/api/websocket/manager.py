"""WebSocket connection manager.

Holds the connections of the local view (every open browser tab of this
client) and pushes view snapshots to them. Use via app.state.ws_manager
(set in lifespan).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks open connections and broadcasts JSON snapshots to all of them.

    publish() can be called from synchronous view callbacks; it schedules the
    broadcast on the running loop and keeps a reference to the task until it ends.
    """

    def __init__(self) -> None:
        self._connections: set[WebSocket] = set()
        self._lock = asyncio.Lock()
        self._pending: set[asyncio.Task[None]] = set()

    async def connect(self, websocket: WebSocket) -> None:
        """Accept and register a new connection."""
        await websocket.accept()
        async with self._lock:
            self._connections.add(websocket)

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            self._connections.discard(websocket)

    async def broadcast(self, message: str | dict[str, Any]) -> None:
        """Send a message to every connected client; drop connections that fail."""
        async with self._lock:
            snapshot = list(self._connections)
        dead: list[WebSocket] = []
        for ws in snapshot:
            try:
                if isinstance(message, dict):
                    await ws.send_json(message)
                else:
                    await ws.send_text(message)
            except (RuntimeError, OSError) as exc:
                logger.debug("Dropping websocket after send failure: %s", exc)
                dead.append(ws)
        if dead:
            async with self._lock:
                for ws in dead:
                    self._connections.discard(ws)

    def publish(self, message: str | dict[str, Any]) -> None:
        """Schedule a broadcast without awaiting it (no-op with no connections)."""
        if not self._connections:
            return
        task = asyncio.get_running_loop().create_task(self.broadcast(message))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def get_connection_count(self) -> int:
        async with self._lock:
            return len(self._connections)
