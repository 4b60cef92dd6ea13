"""Coloring book session endpoints."""

import logging
from urllib.parse import quote
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response

from dreamcolor.coloring import GenerationSession, WorkflowStep
from dreamcolor.exceptions import ExportError
from dreamcolor.export import export_pdf, export_filename

from app.config import Settings
from app.dependencies import (
    get_book_session,
    get_connection_manager,
    get_gemini_service,
    get_session_store,
    get_settings
)
from app.models.book import GenerateRequest, SessionView
from app.services.gemini_service import GeminiService
from app.services.session_store import BookSession, SessionStore
from app.websocket.connection_manager import ConnectionManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["books"])


@router.post("", response_model=SessionView, status_code=201)
async def create_session(
    store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings)
) -> SessionView:
    """Create an empty book session."""
    book = store.create()
    logger.info(f"Created session {book.id}")
    return SessionView.from_session(book, settings.PAGE_COUNT)


@router.get("/{session_id}", response_model=SessionView)
async def get_session(
    book: BookSession = Depends(get_book_session),
    settings: Settings = Depends(get_settings)
) -> SessionView:
    """Return the current state of a session."""
    return SessionView.from_session(book, settings.PAGE_COUNT)


@router.post("/{session_id}/generate", response_model=SessionView, status_code=202)
async def generate_book(
    request: GenerateRequest,
    background_tasks: BackgroundTasks,
    book: BookSession = Depends(get_book_session),
    service: GeminiService = Depends(get_gemini_service),
    manager: ConnectionManager = Depends(get_connection_manager),
    settings: Settings = Depends(get_settings)
) -> SessionView:
    """
    Start generating a coloring book for a theme.

    The session enters the generating step immediately; pages are produced
    in the background and pushed to WebSocket watchers as they change.
    """
    theme = request.theme.strip()
    if not theme:
        raise HTTPException(status_code=400, detail="Theme cannot be empty")
    if book.generation.is_generating:
        raise HTTPException(status_code=409, detail="A book is already being generated")

    book.generation.begin(theme)
    logger.info(f"Session {book.id}: generating book for '{theme}'")

    async def publish(session: GenerationSession) -> None:
        view = SessionView.from_session(book, settings.PAGE_COUNT)
        await manager.broadcast(book.id, {"type": "session", "data": view.model_dump(mode="json")})

    background_tasks.add_task(service.generate_book, book.generation, publish)
    return SessionView.from_session(book, settings.PAGE_COUNT)


@router.post("/{session_id}/dismiss-error", response_model=SessionView)
async def dismiss_error(
    book: BookSession = Depends(get_book_session),
    settings: Settings = Depends(get_settings)
) -> SessionView:
    """Close the error banner; theme and pages stay as they are."""
    book.generation.dismiss_error()
    return SessionView.from_session(book, settings.PAGE_COUNT)


@router.post("/{session_id}/reset", response_model=SessionView)
async def reset_session(
    book: BookSession = Depends(get_book_session),
    settings: Settings = Depends(get_settings)
) -> SessionView:
    """Start over with a fresh book."""
    if book.generation.is_generating:
        raise HTTPException(status_code=409, detail="Cannot start over while generating")
    book.generation.reset()
    return SessionView.from_session(book, settings.PAGE_COUNT)


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    book: BookSession = Depends(get_book_session),
    store: SessionStore = Depends(get_session_store)
) -> Response:
    """Forget a session and its pages."""
    if book.generation.is_generating:
        raise HTTPException(status_code=409, detail="Cannot delete a session while generating")
    store.delete(book.id)
    logger.info(f"Deleted session {book.id}")
    return Response(status_code=204)


@router.get("/{session_id}/export")
def export_book(book: BookSession = Depends(get_book_session)) -> Response:
    """
    Download the finished book as a PDF.

    Raises:
        HTTPException: 409 if the book is not finished, 500 if the PDF fails
    """
    generation = book.generation
    if generation.current_step != WorkflowStep.RESULTS:
        raise HTTPException(status_code=409, detail="Book is not ready yet")

    try:
        pdf_bytes = export_pdf(generation.theme, generation.pages)
    except ExportError as e:
        logger.error(f"Session {book.id}: export failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    # Headers are latin-1: plain filename is ASCII, filename* carries the UTF-8 name
    filename = export_filename(generation.theme, ascii_only=True)
    utf8_filename = quote(export_filename(generation.theme))
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": (
                f"attachment; filename=\"{filename}\"; filename*=UTF-8''{utf8_filename}"
            )
        }
    )
