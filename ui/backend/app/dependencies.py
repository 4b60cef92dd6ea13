"""FastAPI dependencies shared by the routers."""
from functools import lru_cache

from fastapi import Depends, HTTPException

from app.config import Settings, settings
from app.services.gemini_service import GeminiService
from app.services.session_store import BookSession, SessionStore
from app.websocket.connection_manager import ConnectionManager

session_store = SessionStore(
    max_sessions=settings.MAX_SESSIONS,
    ttl_seconds=settings.SESSION_TTL_SECONDS
)
progress_manager = ConnectionManager()


def get_settings() -> Settings:
    return settings


@lru_cache
def get_gemini_service() -> GeminiService:
    """Build the Gemini service once, on first use."""
    return GeminiService(get_settings())


def get_session_store() -> SessionStore:
    return session_store


def get_connection_manager() -> ConnectionManager:
    return progress_manager


def get_book_session(
    session_id: str,
    store: SessionStore = Depends(get_session_store)
) -> BookSession:
    """
    Look up the session named in the path.

    Raises:
        HTTPException: 404 if the session does not exist
    """
    book = store.get(session_id)
    if book is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return book
