"""Book session models for the DreamColor API."""

from typing import List, Optional
from pydantic import BaseModel, Field

from dreamcolor.coloring import ColoringPage, WorkflowStep

from app.services.session_store import BookSession


class GenerateRequest(BaseModel):
    """Request to start generating a book."""
    theme: str = Field(..., max_length=500)


class SessionView(BaseModel):
    """Everything the browser needs to render the current step."""
    id: str
    theme: str
    pages: List[ColoringPage]
    is_generating: bool
    current_step: WorkflowStep
    error: Optional[str] = None
    completed_count: int
    total_pages: int
    progress_percent: float
    status_line: str

    @classmethod
    def from_session(cls, book: BookSession, page_count: int) -> "SessionView":
        """
        Build the view of a session.

        Args:
            book: Stored book session
            page_count: Configured pages per book, used before pages exist
        """
        generation = book.generation
        total = len(generation.pages) or page_count
        designing = min(generation.completed_count + 1, total)
        return cls(
            id=book.id,
            theme=generation.theme,
            pages=generation.pages,
            is_generating=generation.is_generating,
            current_step=generation.current_step,
            error=generation.error,
            completed_count=generation.completed_count,
            total_pages=total,
            progress_percent=generation.completed_count / total * 100,
            status_line=f"Designing page {designing} of {total} for theme: {generation.theme}."
        )
