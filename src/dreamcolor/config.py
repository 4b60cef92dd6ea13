"""Centralized configuration for DreamColor.

This module provides:
- PROJECT_ROOT and SRC_DIR paths
- Environment variable access with get_env()
- Automatic .env loading

Usage:
    from dreamcolor.config import get_env, get_page_count

    api_key = get_gemini_api_key()
    pages = get_page_count()
"""

import logging
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Calculate paths once at import time
SRC_DIR = Path(__file__).parent.parent.resolve()
PROJECT_ROOT = SRC_DIR.parent.resolve()

# Load .env from project root
_env_path = PROJECT_ROOT / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

API_KEY_ENV = "GEMINI_API_KEY"
PLACEHOLDER_API_KEY = "dummy-key"

DEFAULT_TEXT_MODEL = "gemini-2.0-flash"
DEFAULT_IMAGE_MODEL = "imagen-3.0-generate-002"
DEFAULT_PAGE_COUNT = 3
DEFAULT_MAX_CONCURRENT_IMAGES = 1
DEFAULT_MAX_SESSIONS = 100
DEFAULT_SESSION_TTL_SECONDS = 4 * 60 * 60


def get_env(key: str, default: Optional[str] = None) -> str:
    """Get environment variable value.

    Args:
        key: Environment variable name
        default: Default value if not set. If None and key not found, raises KeyError.

    Returns:
        Environment variable value or default

    Raises:
        KeyError: If key not found and no default provided
    """
    value = os.environ.get(key)
    if value is not None:
        return value
    if default is not None:
        return default
    raise KeyError(f"Environment variable '{key}' not set and no default provided")


def _get_positive_int(key: str, default: int) -> int:
    raw = get_env(key, default=str(default))
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from e
    if value < 1:
        raise ConfigurationError(f"{key} must be at least 1, got {value}")
    return value


def get_gemini_api_key() -> str:
    """
    Get Gemini API key from environment.

    A missing key is not fatal: a warning is logged and a placeholder is
    returned, so requests fail at the provider instead of at startup.
    """
    api_key = os.environ.get(API_KEY_ENV)
    if not api_key:
        logger.warning(
            f"WARNING: {API_KEY_ENV} is missing! Set it in .env or the environment."
        )
        return PLACEHOLDER_API_KEY
    return api_key


def get_text_model() -> str:
    """Get the text/chat model identifier."""
    return get_env("DREAMCOLOR_TEXT_MODEL", default=DEFAULT_TEXT_MODEL)


def get_image_model() -> str:
    """Get the image model identifier."""
    return get_env("DREAMCOLOR_IMAGE_MODEL", default=DEFAULT_IMAGE_MODEL)


def get_page_count() -> int:
    """Get the number of coloring pages per book."""
    return _get_positive_int("DREAMCOLOR_PAGE_COUNT", DEFAULT_PAGE_COUNT)


def get_max_concurrent_images() -> int:
    """Get the image generation concurrency limit (1 = sequential)."""
    return _get_positive_int("DREAMCOLOR_MAX_CONCURRENT_IMAGES", DEFAULT_MAX_CONCURRENT_IMAGES)


def get_max_sessions() -> int:
    """Get how many browser sessions the backend keeps in memory."""
    return _get_positive_int("DREAMCOLOR_MAX_SESSIONS", DEFAULT_MAX_SESSIONS)


def get_session_ttl_seconds() -> int:
    """Get how long an idle browser session is kept, in seconds."""
    return _get_positive_int("DREAMCOLOR_SESSION_TTL_SECONDS", DEFAULT_SESSION_TTL_SECONDS)
