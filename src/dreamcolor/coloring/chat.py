"""Theme brainstorming chat assistant."""

import logging
from typing import List

from ..util.gemini import GeminiAPI
from .models import ChatConversation, ChatMessage, ChatRole

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a creative assistant for a coloring book app. "
    "Help users brainstorm creative themes. Keep responses short."
)
FALLBACK_REPLY = "I'm having trouble thinking right now, try again!"


async def send_chat_message(api: GeminiAPI, history: List[ChatMessage], new_message: str) -> str:
    """
    Send a message to the assistant with the previous turns as context.

    Args:
        api: Configured GeminiAPI
        history: Prior messages, oldest first
        new_message: Text typed by the user

    Returns:
        The reply text, or a fixed placeholder if Gemini returned none
    """
    turns = [{"role": msg.role.provider_role, "text": msg.text} for msg in history]
    result = await api.send_chat_async(turns, new_message, SYSTEM_INSTRUCTION)
    return result.text or FALLBACK_REPLY


class ChatAssistant:
    """Keeps a conversation transcript in sync with the assistant."""

    def __init__(self, api: GeminiAPI):
        self.api = api

    async def reply(self, conversation: ChatConversation, text: str) -> ChatMessage:
        """
        Append the user message, ask Gemini, append and return the reply.

        The user message stays in the transcript even if the call raises.
        """
        history = list(conversation.messages)
        conversation.append(ChatRole.USER, text)
        logger.debug(f"Chat message with {len(history)} prior turns")
        reply_text = await send_chat_message(self.api, history, text)
        return conversation.append(ChatRole.ASSISTANT, reply_text)
