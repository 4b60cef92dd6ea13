"""Manage WebSocket connections from browser tabs."""
import uuid
from typing import Dict, Any
from fastapi import WebSocket


class ConnectionManager:
    """Manage active WebSocket connections, grouped by book session."""

    def __init__(self):
        # session_id -> {client_id: websocket}
        self.active_connections: Dict[str, Dict[str, WebSocket]] = {}

    def connect(self, session_id: str, websocket: WebSocket) -> str:
        """
        Register a new WebSocket connection for a session.

        Args:
            session_id: Book session the client watches
            websocket: The WebSocket connection

        Returns:
            client_id: Unique identifier for this connection
        """
        client_id = str(uuid.uuid4())
        self.active_connections.setdefault(session_id, {})[client_id] = websocket
        return client_id

    def disconnect(self, session_id: str, client_id: str) -> None:
        """
        Remove a WebSocket connection.

        Args:
            session_id: Book session the client watched
            client_id: The client to disconnect
        """
        clients = self.active_connections.get(session_id)
        if clients is None:
            return
        clients.pop(client_id, None)
        if not clients:
            del self.active_connections[session_id]

    def connection_count(self, session_id: str) -> int:
        """Return number of active connections for a session."""
        return len(self.active_connections.get(session_id, {}))

    async def broadcast(self, session_id: str, message: Dict[str, Any]) -> None:
        """
        Send message to all clients watching a session.

        Automatically removes clients that fail to receive.

        Args:
            session_id: Target book session
            message: JSON-serializable message to broadcast
        """
        disconnected = []

        for client_id, websocket in list(self.active_connections.get(session_id, {}).items()):
            try:
                await websocket.send_json(message)
            except Exception:
                disconnected.append(client_id)

        # Clean up failed connections
        for client_id in disconnected:
            self.disconnect(session_id, client_id)
