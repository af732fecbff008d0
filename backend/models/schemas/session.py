"""Interview session records held by the session store."""

from datetime import datetime, timezone
from typing import Literal

from pydantic import Field

from models.base import CamelModel


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InterviewContext(CamelModel):
    role: str = Field(..., min_length=1, max_length=200, description="Target role, e.g. 'Backend Developer'")
    level: str = Field("mid", max_length=50, description="Seniority level")
    tech_stack: list[str] = Field(default_factory=list, max_length=30)
    company: str = Field("", max_length=200)
    category: str = Field("", max_length=100, description="Interview category id from the catalogue")
    duration: str | None = Field(None, max_length=50)


class ConversationEntry(CamelModel):
    timestamp: datetime = Field(default_factory=_now)
    speaker: Literal["ai", "user"]
    message: str
    kind: Literal["greeting", "question", "answer", "feedback"] | None = None


class InterviewSession(CamelModel):
    session_id: str
    user_id: str | None = None
    context: InterviewContext
    resume_summary: dict = {}
    conversation: list[ConversationEntry] = []
    started_at: datetime = Field(default_factory=_now)
    last_activity: datetime = Field(default_factory=_now)
    ended_at: datetime | None = None
    status: Literal["active", "completed", "abandoned"] = "active"

    def transcript_text(self) -> str:
        """Render the conversation as 'Interviewer:/Candidate:' lines."""
        lines = []
        for entry in self.conversation:
            speaker = "Interviewer" if entry.speaker == "ai" else "Candidate"
            lines.append(f"{speaker}: {entry.message}")
        return "\n".join(lines)

    @property
    def answers_given(self) -> int:
        return sum(1 for e in self.conversation if e.speaker == "user")
