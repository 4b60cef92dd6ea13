"""Chat models for the DreamColor assistant."""

from typing import List
from pydantic import BaseModel, Field

from dreamcolor.coloring import ChatMessage


class ChatRequest(BaseModel):
    """Request to chat endpoint."""
    message: str = Field(..., min_length=1, max_length=10000)


class ChatResponse(BaseModel):
    """Response from chat endpoint."""
    message: str
    history: List[ChatMessage] = Field(default_factory=list)
