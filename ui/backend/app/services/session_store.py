"""In-memory store of browser sessions."""
import logging
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Optional

from dreamcolor.coloring import ChatConversation, GenerationSession
from dreamcolor.config import DEFAULT_MAX_SESSIONS, DEFAULT_SESSION_TTL_SECONDS

logger = logging.getLogger(__name__)


@dataclass
class BookSession:
    """Everything the UI keeps for one browser tab."""
    id: str
    generation: GenerationSession = field(default_factory=GenerationSession)
    conversation: ChatConversation = field(default_factory=ChatConversation)
    last_seen: float = 0.0


class SessionStore:
    """
    Keep book sessions in memory, keyed by session id.

    Sessions idle for longer than ttl_seconds are dropped, and once more
    than max_sessions exist the least recently used ones go first. A
    session that is still generating is never evicted.
    """

    def __init__(
        self,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        ttl_seconds: Optional[float] = DEFAULT_SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        # Least recently used first
        self.sessions: "OrderedDict[str, BookSession]" = OrderedDict()

    def create(self) -> BookSession:
        """
        Create and register a new empty session.

        Returns:
            The new BookSession with a unique id
        """
        session = BookSession(id=str(uuid.uuid4()), last_seen=self.clock())
        self.sessions[session.id] = session
        self._evict(keep=session.id)
        return session

    def get(self, session_id: str) -> Optional[BookSession]:
        """Return a live session and mark it as recently used."""
        session = self.sessions.get(session_id)
        if session is None:
            return None
        if self._expired(session):
            self.delete(session_id)
            return None
        session.last_seen = self.clock()
        self.sessions.move_to_end(session_id)
        return session

    def delete(self, session_id: str) -> None:
        self.sessions.pop(session_id, None)

    @property
    def session_count(self) -> int:
        return len(self.sessions)

    def _expired(self, session: BookSession) -> bool:
        if self.ttl_seconds is None or session.generation.is_generating:
            return False
        return self.clock() - session.last_seen > self.ttl_seconds

    def _evict(self, keep: str) -> None:
        for session_id, session in list(self.sessions.items()):
            if session_id != keep and self._expired(session):
                logger.info(f"Evicting idle session {session_id}")
                self.delete(session_id)

        while len(self.sessions) > self.max_sessions:
            oldest = next(
                (
                    session_id for session_id, session in self.sessions.items()
                    if session_id != keep and not session.generation.is_generating
                ),
                None
            )
            if oldest is None:
                break
            logger.info(f"Evicting least recently used session {oldest}")
            self.delete(oldest)
