"""Configuration for the DreamColor backend."""
from pathlib import Path

from dreamcolor.config import (
    get_env,
    get_text_model,
    get_image_model,
    get_page_count,
    get_max_concurrent_images,
    get_max_sessions,
    get_session_ttl_seconds
)


class Settings:
    """Application settings."""

    def __init__(self):
        # Gemini settings
        self.TEXT_MODEL = get_text_model()
        self.IMAGE_MODEL = get_image_model()

        # Book generation
        self.PAGE_COUNT = get_page_count()
        self.MAX_CONCURRENT_IMAGES = get_max_concurrent_images()  # 1 = sequential

        # Session retention
        self.MAX_SESSIONS = get_max_sessions()
        self.SESSION_TTL_SECONDS = get_session_ttl_seconds()

        # CORS for local development (Vite ports)
        self.CORS_ORIGINS = [
            origin.strip()
            for origin in get_env(
                "DREAMCOLOR_CORS_ORIGINS",
                default="http://localhost:5173,http://localhost:5174"
            ).split(",")
            if origin.strip()
        ]

        self.STATIC_DIR = Path(__file__).parent / "static"


# Global settings instance
settings = Settings()
