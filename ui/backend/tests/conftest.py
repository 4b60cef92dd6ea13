"""Pytest configuration for UI backend tests."""
import sys
import pytest
from pathlib import Path
from unittest.mock import AsyncMock, Mock

# Add backend root to path so imports work
backend_root = Path(__file__).parent.parent
sys.path.insert(0, str(backend_root))

from dreamcolor.util.gemini import GeminiAPI, TextResult  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep real credentials and overrides out of backend tests."""
    for key in (
        "GEMINI_API_KEY",
        "DREAMCOLOR_TEXT_MODEL",
        "DREAMCOLOR_IMAGE_MODEL",
        "DREAMCOLOR_PAGE_COUNT",
        "DREAMCOLOR_MAX_CONCURRENT_IMAGES",
        "DREAMCOLOR_MAX_SESSIONS",
        "DREAMCOLOR_SESSION_TTL_SECONDS",
        "DREAMCOLOR_CORS_ORIGINS",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def mock_api():
    """GeminiAPI double with async methods returning canned responses."""
    api = Mock(spec=GeminiAPI)
    api.generate_content_async = AsyncMock(return_value=TextResult(
        text='["A T-rex astronaut", "Raptors in a rocket", "A stegosaurus space station"]'
    ))
    api.generate_image_async = AsyncMock(return_value=b"fake-jpeg-bytes")
    api.send_chat_async = AsyncMock(return_value=TextResult(text="How about 'Underwater Castles'?"))
    return api


@pytest.fixture
def store():
    from app.services.session_store import SessionStore
    return SessionStore()


@pytest.fixture
def manager():
    """Connection manager whose broadcasts are recorded."""
    from app.websocket.connection_manager import ConnectionManager
    manager = ConnectionManager()
    manager.broadcast = AsyncMock()
    return manager


@pytest.fixture
def service(mock_api):
    from app.config import Settings
    from app.services.gemini_service import GeminiService
    return GeminiService(Settings(), api=mock_api)


@pytest.fixture
def client(store, manager, service):
    """TestClient with the session store, Gemini service and broadcaster injected."""
    from fastapi.testclient import TestClient
    from app.config import Settings
    from app.dependencies import (
        get_connection_manager,
        get_gemini_service,
        get_session_store,
        get_settings
    )
    from app.main import app

    app.dependency_overrides[get_session_store] = lambda: store
    app.dependency_overrides[get_connection_manager] = lambda: manager
    app.dependency_overrides[get_gemini_service] = lambda: service
    app.dependency_overrides[get_settings] = Settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
