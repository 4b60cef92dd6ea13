"""Tests for the progress WebSocket endpoint."""
import pytest
from starlette.websockets import WebSocketDisconnect


class TestProgressEndpoint:

    def test_sends_current_view_on_connect(self, client):
        session_id = client.post("/api/sessions").json()["id"]

        with client.websocket_connect(f"/ws/sessions/{session_id}") as websocket:
            message = websocket.receive_json()

        assert message["type"] == "session"
        assert message["data"]["id"] == session_id
        assert message["data"]["current_step"] == 0

    def test_ping_pong(self, client):
        session_id = client.post("/api/sessions").json()["id"]

        with client.websocket_connect(f"/ws/sessions/{session_id}") as websocket:
            websocket.receive_json()
            websocket.send_json({"type": "ping"})
            assert websocket.receive_json() == {"type": "pong"}

    def test_registers_and_releases_connection(self, client, manager):
        session_id = client.post("/api/sessions").json()["id"]

        with client.websocket_connect(f"/ws/sessions/{session_id}") as websocket:
            websocket.receive_json()
            assert manager.connection_count(session_id) == 1

    def test_unknown_session_is_refused(self, client):
        with pytest.raises(WebSocketDisconnect):
            with client.websocket_connect("/ws/sessions/unknown") as websocket:
                websocket.receive_json()
