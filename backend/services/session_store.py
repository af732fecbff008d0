"""In-memory interview session store.

One instance is created at application start-up and handed to routes through
a FastAPI dependency. Sessions are created when an interview starts, removed
when it ends, and pruned once idle longer than the configured timeout.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone

from models.schemas.session import ConversationEntry, InterviewContext, InterviewSession

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """No active interview session with the given id."""


class SessionStore:
    def __init__(self, timeout: timedelta = timedelta(minutes=60)) -> None:
        self.timeout = timeout
        self._sessions: dict[str, InterviewSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create(
        self,
        context: InterviewContext,
        user_id: str | None = None,
        resume_summary: dict | None = None,
    ) -> InterviewSession:
        self.prune_expired()
        session = InterviewSession(
            session_id=f"s_{uuid.uuid4().hex}",
            user_id=user_id,
            context=context,
            resume_summary=resume_summary or {},
        )
        self._sessions[session.session_id] = session
        logger.info("Interview session %s started (%s, %s)", session.session_id, context.role, context.level)
        return session

    def get(self, session_id: str) -> InterviewSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def add_message(
        self,
        session_id: str,
        speaker: str,
        message: str,
        kind: str | None = None,
    ) -> ConversationEntry:
        session = self.get(session_id)
        entry = ConversationEntry(speaker=speaker, message=message, kind=kind)
        session.conversation.append(entry)
        session.last_activity = entry.timestamp
        return entry

    def end(self, session_id: str) -> InterviewSession:
        """Close a session and remove it from the store."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFoundError(session_id)
        session.ended_at = datetime.now(timezone.utc)
        session.status = "completed"
        logger.info("Interview session %s ended after %d turns", session_id, len(session.conversation))
        return session

    def prune_expired(self, now: datetime | None = None) -> int:
        """Drop sessions idle longer than the timeout. Returns how many were removed."""
        now = now or datetime.now(timezone.utc)
        expired = [sid for sid, s in self._sessions.items() if now - s.last_activity > self.timeout]
        for sid in expired:
            session = self._sessions.pop(sid)
            session.status = "abandoned"
        if expired:
            logger.info("Pruned %d idle interview sessions", len(expired))
        return len(expired)

    def clear(self) -> None:
        self._sessions.clear()
