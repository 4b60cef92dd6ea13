"""Health and status endpoints."""

from fastapi import APIRouter, Depends

from app.dependencies import get_session_store
from app.services.session_store import SessionStore

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(store: SessionStore = Depends(get_session_store)):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "dreamcolor-api",
        "sessions": store.session_count
    }
