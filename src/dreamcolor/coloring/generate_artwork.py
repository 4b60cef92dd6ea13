"""Generate coloring page artwork using Gemini Imagen."""

import base64
import logging
import re
from google.genai import types

from ..exceptions import ImageGenerationError
from ..util.gemini import GeminiAPI

logger = logging.getLogger(__name__)

IMAGE_MIME_TYPE = "image/jpeg"
ASPECT_RATIO = "3:4"  # Portrait for book pages

_DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,(?P<payload>.+)$", re.DOTALL)


def construct_image_prompt(scene_description: str) -> str:
    """
    Wrap a scene description in the coloring book style template.

    Args:
        scene_description: Plain scene text

    Returns:
        Complete prompt string for Imagen
    """
    return f"""
A high-quality coloring book page of {scene_description}.
Strictly black and white line art.
Thick, clean black outlines.
White background.
No shading, no greyscale, no colors.
Vector style illustration.
Detailed enough to be interesting to color.
"""


def to_data_uri(image_bytes: bytes, mime_type: str = IMAGE_MIME_TYPE) -> str:
    """Encode raw image bytes as a base64 data URI."""
    payload = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def decode_data_uri(data_uri: str) -> bytes:
    """
    Decode a base64 data URI back to raw bytes.

    Raises:
        ValueError: If the string is not a base64 data URI
    """
    match = _DATA_URI_PATTERN.match(data_uri.strip())
    if not match:
        raise ValueError("Not a base64 data URI")
    return base64.b64decode(match.group("payload"))


async def generate_coloring_image(api: GeminiAPI, scene_description: str) -> str:
    """
    Render one scene description as a coloring page.

    Args:
        api: Configured GeminiAPI
        scene_description: Scene to draw

    Returns:
        Image as data:image/jpeg;base64,<payload>

    Raises:
        ImageGenerationError: If the API fails or returns no image
    """
    prompt = construct_image_prompt(scene_description)
    logger.debug(f"Image generation prompt: {prompt}")

    config = types.GenerateImagesConfig(
        number_of_images=1,
        aspect_ratio=ASPECT_RATIO,
        output_mime_type=IMAGE_MIME_TYPE
    )

    try:
        image_bytes = await api.generate_image_async(prompt, config)
    except Exception as e:
        logger.error(f"Error generating image: {e}")
        raise ImageGenerationError(f"Failed to generate coloring image: {e}") from e

    if not image_bytes:
        raise ImageGenerationError("No image generated")

    logger.info(f"Generated coloring image ({len(image_bytes)} bytes)")
    return to_data_uri(image_bytes)
