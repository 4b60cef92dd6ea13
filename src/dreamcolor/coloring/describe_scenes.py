"""Generate coloring page scene descriptions from a theme using Gemini."""

import json
import logging
from typing import List
from google.genai import types

from ..config import DEFAULT_PAGE_COUNT
from ..util.gemini import GeminiAPI

logger = logging.getLogger(__name__)

SCENE_LIST_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(type=types.Type.STRING)
)


def build_scene_prompt(theme: str, page_count: int) -> str:
    """Build the instruction asking Gemini for page_count scene descriptions."""
    return f"""
Create {page_count} distinct, creative scenes for a coloring book based on the theme: "{theme}".
The scenes should be suitable for black and white line art.
The complexity can vary but should be clear and colorable.
Return ONLY a JSON array of strings, where each string is a detailed description of a scene.
Do not include markdown formatting like ```json.
"""


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences (```json ... ```) around a response."""
    return text.replace("```json", "").replace("```", "").strip()


def fallback_prompts(theme: str, page_count: int) -> List[str]:
    """Deterministic placeholder descriptions: "<theme> - Scene <i>"."""
    return [f"{theme} - Scene {i}" for i in range(1, page_count + 1)]


def _normalize(theme: str, scenes: list, page_count: int) -> List[str]:
    """Keep non-empty strings, fill missing slots with placeholders, drop extras."""
    cleaned = [s.strip() for s in scenes if isinstance(s, str) and s.strip()]
    if len(cleaned) != page_count:
        logger.warning(f"Expected {page_count} scenes, Gemini returned {len(cleaned)} usable ones")
    placeholders = fallback_prompts(theme, page_count)
    return [
        cleaned[i] if i < len(cleaned) else placeholders[i]
        for i in range(page_count)
    ]


async def generate_page_prompts(
    api: GeminiAPI,
    theme: str,
    page_count: int = DEFAULT_PAGE_COUNT
) -> List[str]:
    """
    Ask Gemini for scene descriptions for a coloring book.

    Never raises for provider problems: network errors, empty responses and
    malformed JSON all fall back to placeholder descriptions.

    Args:
        api: Configured GeminiAPI
        theme: Book theme (non-empty)
        page_count: Number of scenes to produce

    Returns:
        Exactly page_count non-empty scene descriptions

    Raises:
        ValueError: If theme is blank or page_count is below 1
    """
    theme = theme.strip()
    if not theme:
        raise ValueError("Theme cannot be empty")
    if page_count < 1:
        raise ValueError("page_count must be at least 1")

    logger.info(f"Generating {page_count} scene descriptions for theme '{theme}'")
    prompt = build_scene_prompt(theme, page_count)
    config = types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=SCENE_LIST_SCHEMA
    )

    try:
        result = await api.generate_content_async(prompt, config)
        if result.text is None:
            raise ValueError("No response from Gemini")

        logger.debug(f"Gemini response: {result.text}")
        scenes = json.loads(strip_code_fences(result.text))
        if not isinstance(scenes, list):
            raise ValueError(f"Expected a JSON array, got {type(scenes).__name__}")

    except Exception as e:
        logger.error(f"Error generating prompts, using placeholders: {e}")
        return fallback_prompts(theme, page_count)

    return _normalize(theme, scenes, page_count)
