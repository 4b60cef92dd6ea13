"""
Shared pytest fixtures for DreamColor tests.
"""

import io
import pytest
from unittest.mock import AsyncMock, Mock
from PIL import Image

from dreamcolor.coloring.models import ColoringPage, PageStatus
from dreamcolor.util.gemini import GeminiAPI, TextResult


@pytest.fixture(autouse=True)
def isolated_env(request, monkeypatch):
    """Keep real credentials and overrides out of unit tests."""
    if request.node.get_closest_marker("integration"):
        return
    for key in (
        "GEMINI_API_KEY",
        "DREAMCOLOR_TEXT_MODEL",
        "DREAMCOLOR_IMAGE_MODEL",
        "DREAMCOLOR_PAGE_COUNT",
        "DREAMCOLOR_MAX_CONCURRENT_IMAGES",
        "DREAMCOLOR_MAX_SESSIONS",
        "DREAMCOLOR_SESSION_TTL_SECONDS",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def mock_api():
    """GeminiAPI double with async methods returning canned responses."""
    api = Mock(spec=GeminiAPI)
    api.generate_content_async = AsyncMock(return_value=TextResult(
        text='["A T-rex astronaut on the moon", "Raptors in a rocket", "A stegosaurus space station"]'
    ))
    api.generate_image_async = AsyncMock(return_value=b"fake-jpeg-bytes")
    api.send_chat_async = AsyncMock(return_value=TextResult(text="How about 'Underwater Castles'?"))
    return api


@pytest.fixture(scope="session")
def jpeg_bytes():
    """A small real JPEG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (60, 80), "white").save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def jpeg_data_uri(jpeg_bytes):
    from dreamcolor.coloring.generate_artwork import to_data_uri
    return to_data_uri(jpeg_bytes)


@pytest.fixture
def finished_pages(jpeg_data_uri):
    """Pages as they look after a run where the middle page failed."""
    return [
        ColoringPage(id="0", prompt="Scene one", image_url=jpeg_data_uri, status=PageStatus.COMPLETED),
        ColoringPage(id="1", prompt="Scene two", status=PageStatus.FAILED),
        ColoringPage(id="2", prompt="Scene three", image_url=jpeg_data_uri, status=PageStatus.COMPLETED),
    ]
