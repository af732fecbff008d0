from typing import Any, Literal

from pydantic import Field

from models.base import CamelModel
from models.responses import ResumeAnalysis
from models.schemas.session import InterviewContext


class ResumeAnalyzeRequest(CamelModel):
    resume_text: str = Field(..., max_length=50000, description="Plain text resume content")
    category: str = Field("general", max_length=100)
    user_id: str | None = None


class QuestionSetRequest(CamelModel):
    role: str = Field(..., min_length=1, max_length=200)
    level: str = Field(..., min_length=1, max_length=50)
    tech_stack: list[str] = Field(..., max_length=30)
    count: int = Field(5, ge=1, le=15)
    user_id: str | None = None


class InterviewStartRequest(CamelModel):
    context: InterviewContext
    resume_analysis: ResumeAnalysis | None = None
    user_id: str | None = None


class InterviewTurnRequest(CamelModel):
    session_id: str = Field(..., min_length=1)
    message: str = Field(..., max_length=5000, description="Candidate's answer")


class VoiceTurnRequest(CamelModel):
    session_id: str = Field(..., min_length=1)
    transcript: str = Field(..., max_length=5000, description="Transcribed speech")


class InterviewEndRequest(CamelModel):
    session_id: str = Field(..., min_length=1)


class FeedbackRequest(CamelModel):
    transcript: str = Field(..., max_length=100000)
    context: InterviewContext
    resume_analysis: dict[str, Any] | None = None
    user_id: str | None = None


class ComprehensiveResultsRequest(CamelModel):
    resume_analysis: ResumeAnalysis
    interview_transcript: str = Field(..., max_length=100000)
    interview_context: InterviewContext
    session_id: str | None = None
    user_id: str | None = None


class SpeakRequest(CamelModel):
    text: str
    voice: str | None = None
    format: Literal["wav", "pcm"] = "wav"
