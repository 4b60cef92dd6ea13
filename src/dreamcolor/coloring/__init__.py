"""Coloring book scene descriptions, artwork and generation pipeline."""

from .models import (
    PageStatus,
    WorkflowStep,
    ColoringPage,
    GenerationSession,
    ChatRole,
    ChatMessage,
    ChatConversation
)
from .describe_scenes import generate_page_prompts, strip_code_fences, fallback_prompts
from .generate_artwork import generate_coloring_image, construct_image_prompt, decode_data_uri
from .chat import ChatAssistant, send_chat_message
from .pipeline import PageGenerationPipeline, SESSION_ERROR_MESSAGE

__all__ = [
    'PageStatus',
    'WorkflowStep',
    'ColoringPage',
    'GenerationSession',
    'ChatRole',
    'ChatMessage',
    'ChatConversation',
    'generate_page_prompts',
    'strip_code_fences',
    'fallback_prompts',
    'generate_coloring_image',
    'construct_image_prompt',
    'decode_data_uri',
    'ChatAssistant',
    'send_chat_message',
    'PageGenerationPipeline',
    'SESSION_ERROR_MESSAGE'
]
