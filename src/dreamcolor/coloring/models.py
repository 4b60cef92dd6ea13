"""Data models for coloring book generation."""

import uuid
from datetime import datetime
from enum import Enum, IntEnum
from typing import List, Optional
from pydantic import BaseModel, Field

from ..exceptions import InvalidTransitionError


class PageStatus(str, Enum):
    """Lifecycle of a single coloring page."""
    PENDING = "pending"
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"


# pending -> generating -> completed | failed, never backward
_ALLOWED_TRANSITIONS = {
    PageStatus.PENDING: {PageStatus.GENERATING},
    PageStatus.GENERATING: {PageStatus.COMPLETED, PageStatus.FAILED},
    PageStatus.COMPLETED: set(),
    PageStatus.FAILED: set(),
}


class WorkflowStep(IntEnum):
    """Coarse step of the book workflow shown by the UI."""
    INPUT = 0
    GENERATING = 1
    RESULTS = 2


class ColoringPage(BaseModel):
    """One page of the coloring book."""

    id: str
    prompt: str  # Scene description the image is rendered from
    image_url: str = ""  # data:image/jpeg;base64,... once completed
    status: PageStatus = PageStatus.PENDING

    def transition(self, status: PageStatus, image_url: Optional[str] = None) -> None:
        """
        Move the page to a new status.

        Raises:
            InvalidTransitionError: If the move is not pending -> generating
                or generating -> completed/failed
        """
        if status not in _ALLOWED_TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"Page {self.id} cannot move from {self.status.value} to {status.value}"
            )
        self.status = status
        if image_url is not None:
            self.image_url = image_url


class GenerationSession(BaseModel):
    """State of one coloring book session, owned by the UI."""

    theme: str = ""
    pages: List[ColoringPage] = Field(default_factory=list)
    is_generating: bool = False
    current_step: WorkflowStep = WorkflowStep.INPUT
    error: Optional[str] = None

    def begin(self, theme: str) -> None:
        """Enter the generating step for a new theme, clearing previous pages."""
        if self.is_generating:
            raise InvalidTransitionError("A book is already being generated")
        self.theme = theme
        self.pages = []
        self.error = None
        self.is_generating = True
        self.current_step = WorkflowStep.GENERATING

    def load_pages(self, descriptions: List[str]) -> None:
        """Create one pending page per scene description."""
        self.pages = [
            ColoringPage(id=str(idx), prompt=desc)
            for idx, desc in enumerate(descriptions)
        ]

    def finish(self) -> None:
        """Leave the generating step and show results."""
        self.is_generating = False
        self.current_step = WorkflowStep.RESULTS

    def fail(self, message: str) -> None:
        """Record a session-level error and roll back to the input step."""
        self.is_generating = False
        self.error = message
        self.current_step = WorkflowStep.INPUT

    def dismiss_error(self) -> None:
        self.error = None

    def reset(self) -> None:
        """Start over with an empty session."""
        self.theme = ""
        self.pages = []
        self.is_generating = False
        self.current_step = WorkflowStep.INPUT
        self.error = None

    @property
    def completed_count(self) -> int:
        return sum(1 for page in self.pages if page.status == PageStatus.COMPLETED)

    @property
    def failed_count(self) -> int:
        return sum(1 for page in self.pages if page.status == PageStatus.FAILED)

    @property
    def progress_percent(self) -> float:
        """Share of pages completed, 0-100."""
        if not self.pages:
            return 0.0
        return self.completed_count / len(self.pages) * 100


class ChatRole(str, Enum):
    """Chat message role."""
    USER = "user"
    ASSISTANT = "assistant"

    @property
    def provider_role(self) -> str:
        """Role name on the Gemini wire ("model" for the assistant)."""
        return "model" if self is ChatRole.ASSISTANT else "user"


class ChatMessage(BaseModel):
    """Single chat message."""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: ChatRole
    text: str
    timestamp: datetime = Field(default_factory=datetime.now)


class ChatConversation(BaseModel):
    """Append-only chat transcript."""

    messages: List[ChatMessage] = Field(default_factory=list)

    def append(self, role: ChatRole, text: str) -> ChatMessage:
        message = ChatMessage(role=role, text=text)
        self.messages.append(message)
        return message
