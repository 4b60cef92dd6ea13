"""Chat router for the theme brainstorming assistant."""

import logging
from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_book_session, get_gemini_service
from app.models.chat import ChatRequest, ChatResponse
from app.services.gemini_service import GeminiService
from app.services.session_store import BookSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["chat"])


@router.post("/{session_id}/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    book: BookSession = Depends(get_book_session),
    service: GeminiService = Depends(get_gemini_service)
) -> ChatResponse:
    """
    Main chat endpoint.

    Appends the user message and the assistant reply to the session's
    transcript and returns the reply with the full transcript.
    """
    try:
        reply = await service.chat(book.conversation, request.message)
    except Exception as e:
        logger.error(f"Session {book.id}: chat failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return ChatResponse(message=reply.text, history=book.conversation.messages)


@router.get("/{session_id}/chat", response_model=ChatResponse)
async def chat_history(book: BookSession = Depends(get_book_session)) -> ChatResponse:
    """Return the transcript without sending anything."""
    last = book.conversation.messages[-1].text if book.conversation.messages else ""
    return ChatResponse(message=last, history=book.conversation.messages)
