"""
Gemini API utilities for DreamColor.

Centralized module for all Google Generative AI (Gemini / Imagen) interactions.
The client is constructed explicitly and passed to whatever needs it.
"""

import asyncio
from typing import Optional, Any, List, Dict
from google import genai
from google.genai import types
from pydantic import BaseModel

from ..config import get_gemini_api_key, get_text_model, get_image_model


class TextResult(BaseModel):
    """Normalized text payload of a Gemini response."""

    text: Optional[str] = None

    @classmethod
    def from_response(cls, response: Any) -> "TextResult":
        """
        Read the text of a generate_content / chat response.

        Args:
            response: Response object from the google-genai SDK

        Returns:
            TextResult whose text is None when the response carried no text
        """
        text = getattr(response, "text", None)
        if not isinstance(text, str) or not text.strip():
            return cls(text=None)
        return cls(text=text)


class GeminiAPI:
    """Wrapper for Gemini API operations."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        text_model: Optional[str] = None,
        image_model: Optional[str] = None,
        client: Optional[genai.Client] = None
    ):
        """
        Initialize Gemini API client.

        Args:
            api_key: API key (if None, loads from environment)
            text_model: Model used for scene descriptions and chat
            image_model: Model used for coloring page images
            client: Pre-built genai.Client (mostly for tests)
        """
        self.text_model = text_model or get_text_model()
        self.image_model = image_model or get_image_model()
        self.client = client or genai.Client(api_key=api_key or get_gemini_api_key())

    def generate_content(self, prompt: str, config: Optional[types.GenerateContentConfig] = None) -> TextResult:
        """
        Generate text using the text model.

        Args:
            prompt: Text prompt
            config: Optional generation config

        Returns:
            TextResult with the response text
        """
        response = self.client.models.generate_content(
            model=self.text_model,
            contents=prompt,
            config=config
        )
        return TextResult.from_response(response)

    def generate_image(self, prompt: str, config: types.GenerateImagesConfig) -> Optional[bytes]:
        """
        Generate a single image using the image model.

        Returns:
            Raw image bytes, or None if the provider returned no image
        """
        response = self.client.models.generate_images(
            model=self.image_model,
            prompt=prompt,
            config=config
        )
        generated = response.generated_images or []
        if not generated or generated[0].image is None:
            return None
        return generated[0].image.image_bytes or None

    def send_chat(
        self,
        history: List[Dict[str, str]],
        message: str,
        system_instruction: str
    ) -> TextResult:
        """
        Send one message in a chat seeded with prior turns.

        Args:
            history: Prior turns as {"role": "user"|"model", "text": ...}
            message: New user message
            system_instruction: Fixed system instruction for the assistant

        Returns:
            TextResult with the reply text
        """
        chat = self.client.chats.create(
            model=self.text_model,
            config=types.GenerateContentConfig(system_instruction=system_instruction),
            history=[
                types.Content(role=turn["role"], parts=[types.Part(text=turn["text"])])
                for turn in history
            ]
        )
        response = chat.send_message(message)
        return TextResult.from_response(response)

    async def generate_content_async(
        self,
        prompt: str,
        config: Optional[types.GenerateContentConfig] = None
    ) -> TextResult:
        """
        Async wrapper for generate_content using asyncio.to_thread.

        The wrapped calls are synchronous; running them in a thread keeps
        the event loop free for progress updates.
        """
        return await asyncio.to_thread(self.generate_content, prompt, config)

    async def generate_image_async(self, prompt: str, config: types.GenerateImagesConfig) -> Optional[bytes]:
        """Async wrapper for generate_image."""
        return await asyncio.to_thread(self.generate_image, prompt, config)

    async def send_chat_async(
        self,
        history: List[Dict[str, str]],
        message: str,
        system_instruction: str
    ) -> TextResult:
        """Async wrapper for send_chat."""
        return await asyncio.to_thread(self.send_chat, history, message, system_instruction)


def configure_gemini(api_key: Optional[str] = None) -> GeminiAPI:
    """
    Configure and return a Gemini API instance.

    Args:
        api_key: Optional API key (loads from .env if not provided)

    Returns:
        Configured GeminiAPI instance
    """
    return GeminiAPI(api_key=api_key)
