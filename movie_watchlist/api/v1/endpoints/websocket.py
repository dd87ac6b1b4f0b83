"""WebSocket endpoint: single /ws that streams view snapshots.

Uses the ConnectionManager from app.state (set in lifespan). A new connection
first receives the current session and lists; later changes are pushed by
the lifespan's view subscription.
"""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from movie_watchlist.api.websocket.snapshots import rows_snapshot, session_snapshot
from movie_watchlist.application.use_cases.home import EVENT_MOVIES
from movie_watchlist.domain.enums import ResultsTab

router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    manager = websocket.app.state.ws_manager
    context = websocket.app.state.client
    await manager.connect(websocket)
    try:
        await websocket.send_json(session_snapshot(context))
        await websocket.send_json(rows_snapshot(context, EVENT_MOVIES, list(ResultsTab)))
        while True:
            # Clients only listen; incoming text is read to detect disconnects.
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await manager.disconnect(websocket)
