"""WebSocket endpoint streaming book progress to the browser."""
import logging
from fastapi import Depends, WebSocket, WebSocketDisconnect, status

from app.config import Settings
from app.dependencies import get_connection_manager, get_session_store, get_settings
from app.models.book import SessionView
from app.services.session_store import SessionStore
from app.websocket.connection_manager import ConnectionManager

logger = logging.getLogger(__name__)


async def progress_websocket_endpoint(
    websocket: WebSocket,
    session_id: str,
    store: SessionStore = Depends(get_session_store),
    manager: ConnectionManager = Depends(get_connection_manager),
    settings: Settings = Depends(get_settings)
):
    """
    WebSocket endpoint for one book session.

    Protocol:
    - Unknown session: connection is closed with 1008 before accept
    - On connect: sends {"type": "session", "data": {...}} with the current view
    - Client can send {"type": "ping"} -> receives {"type": "pong"}
    - Server pushes {"type": "session", "data": {...}} on every page update
    """
    book = store.get(session_id)
    if book is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    client_id = manager.connect(session_id, websocket)

    logger.info(f"Progress client connected: {client_id} (session {session_id})")

    try:
        view = SessionView.from_session(book, settings.PAGE_COUNT)
        await websocket.send_json({"type": "session", "data": view.model_dump(mode="json")})

        while True:
            data = await websocket.receive_json()

            if data.get("type") == "ping":
                await websocket.send_json({"type": "pong"})

    except WebSocketDisconnect:
        logger.info(f"Progress client disconnected: {client_id}")
    finally:
        manager.disconnect(session_id, client_id)
