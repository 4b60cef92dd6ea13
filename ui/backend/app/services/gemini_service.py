"""Gemini service for the DreamColor backend."""

from typing import Optional

from dreamcolor.coloring import (
    ChatAssistant,
    ChatConversation,
    ChatMessage,
    GenerationSession,
    PageGenerationPipeline
)
from dreamcolor.coloring.pipeline import UpdateCallback
from dreamcolor.util.gemini import GeminiAPI

from app.config import Settings


class GeminiService:
    """Service for interacting with Gemini API."""

    def __init__(self, settings: Settings, api: Optional[GeminiAPI] = None):
        """
        Initialize Gemini service.

        Args:
            settings: Backend settings (models, page count, concurrency)
            api: Optional pre-built GeminiAPI (built from settings if omitted)
        """
        self.settings = settings
        self.api = api or GeminiAPI(
            text_model=settings.TEXT_MODEL,
            image_model=settings.IMAGE_MODEL
        )
        self.assistant = ChatAssistant(self.api)

    async def generate_book(
        self,
        session: GenerationSession,
        on_update: Optional[UpdateCallback] = None
    ) -> GenerationSession:
        """
        Run the page generation pipeline for a session.

        Args:
            session: Session already moved into the generating step
            on_update: Awaited after every session change

        Returns:
            The updated session
        """
        pipeline = PageGenerationPipeline(
            self.api,
            page_count=self.settings.PAGE_COUNT,
            max_concurrent=self.settings.MAX_CONCURRENT_IMAGES,
            on_update=on_update
        )
        return await pipeline.run(session)

    async def chat(self, conversation: ChatConversation, message: str) -> ChatMessage:
        """Send a chat message and return the assistant reply."""
        return await self.assistant.reply(conversation, message)
