"""Structured results returned to callers, plus the HTTP response envelopes.

Every result variant has a default for every field so an instance is always
fully populated. All scores use the 0-100 scale.
"""

import math
from typing import Annotated, Any, Literal, Union

from pydantic import BeforeValidator, Field

from models.base import CamelModel
from models.schemas.model_io import ModelResponse
from models.schemas.session import ConversationEntry


def _to_score(value: Any) -> int:
    """Coerce a model-supplied score into an int clamped to 0-100."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError("score must be a number")
    if isinstance(value, str):
        value = value.strip().rstrip("%")
    try:
        number = float(value)
    except OverflowError:
        raise ValueError("score out of range")
    if not math.isfinite(number):
        raise ValueError("score must be finite")
    return max(0, min(100, round(number)))


def _to_level(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


Score = Annotated[int, BeforeValidator(_to_score)]
ExperienceLevel = Annotated[Literal["entry", "mid", "senior", "lead"], BeforeValidator(_to_level)]


class Keywords(CamelModel):
    present: list[str] = []
    missing: list[str] = []


class InterviewRecommendation(CamelModel):
    category: str = ""
    name: str = ""
    match: Score = 0
    reason: str = ""


class ResumeAnalysis(CamelModel):
    kind: Literal["resume_analysis"] = "resume_analysis"
    overall_score: Score = 0
    ats_compatibility: Score = 0
    industry_match: Score = 0
    experience_level: ExperienceLevel = "mid"
    detected_role: str = ""
    detected_industry: str = ""
    strengths: list[str] = []
    improvements: list[str] = []
    keywords: Keywords = Keywords()
    recommended_interviews: list[InterviewRecommendation] = []
    next_steps: list[str] = []
    raw_analysis: str = ""
    structured: bool = False


class InterviewQuestion(CamelModel):
    id: int = 0
    type: str = "technical"
    question: str = ""
    follow_ups: list[str] = []
    expected_elements: list[str] = []
    difficulty: str = "medium"
    time_allocation: str = ""


class QuestionSet(CamelModel):
    kind: Literal["question_set"] = "question_set"
    questions: list[InterviewQuestion] = []
    raw_analysis: str = ""
    structured: bool = False


class PerformanceScores(CamelModel):
    technical: Score = 0
    communication: Score = 0
    problem_solving: Score = 0
    confidence: Score = 0


class InterviewFeedback(CamelModel):
    kind: Literal["interview_feedback"] = "interview_feedback"
    overall_score: Score = 0
    performance: PerformanceScores = PerformanceScores()
    strengths: list[str] = []
    improvements: list[str] = []
    next_steps: list[str] = []
    summary: str = ""
    raw_analysis: str = ""
    structured: bool = False


class ResumeAlignment(CamelModel):
    score: Score = 0
    gaps: list[str] = []
    highlights: list[str] = []


class ComprehensiveReport(CamelModel):
    kind: Literal["comprehensive_report"] = "comprehensive_report"
    overall_score: Score = 0
    duration: str = ""
    questions_answered: int = 0
    performance: PerformanceScores = PerformanceScores()
    strengths: list[str] = []
    improvements: list[str] = []
    resume_alignment: ResumeAlignment = ResumeAlignment()
    next_steps: list[str] = []
    recommended_practice: list[str] = []
    raw_analysis: str = ""
    structured: bool = False


StructuredResult = Annotated[
    Union[ResumeAnalysis, QuestionSet, InterviewFeedback, ComprehensiveReport],
    Field(discriminator="kind"),
]


# --- HTTP envelopes ---


class ModelMeta(CamelModel):
    model: str = ""
    success: bool = False
    processing_time_ms: int = 0
    quality_score: float = 0.0
    retry_count: int = 0
    cached: bool = False

    @classmethod
    def from_response(cls, response: ModelResponse) -> "ModelMeta":
        return cls(
            model=response.model_id,
            success=response.success,
            processing_time_ms=response.processing_time_ms,
            quality_score=response.quality_score,
            retry_count=response.retry_count,
            cached=response.cached,
        )


class DocumentInfo(CamelModel):
    file_name: str = ""
    file_size: int = 0
    pages: int = 0
    word_count: int = 0
    character_count: int = 0


class ResumeAnalysisResponse(CamelModel):
    analysis: ResumeAnalysis
    document: DocumentInfo | None = None
    degraded: bool = False
    meta: ModelMeta = ModelMeta()


class QuestionSetResponse(CamelModel):
    questions: QuestionSet
    degraded: bool = False
    meta: ModelMeta = ModelMeta()


class InterviewTurnResponse(CamelModel):
    session_id: str
    reply: str
    turn: int = 0
    degraded: bool = False
    meta: ModelMeta = ModelMeta()


class FeedbackResponse(CamelModel):
    feedback: InterviewFeedback
    degraded: bool = False
    meta: ModelMeta = ModelMeta()


class InterviewEndResponse(CamelModel):
    session_id: str
    transcript: list[ConversationEntry] = []
    feedback: InterviewFeedback
    degraded: bool = False
    meta: ModelMeta = ModelMeta()


class ResumeSummary(CamelModel):
    overall_score: int = 0
    ats_compatibility: int = 0
    detected_role: str = ""
    experience_level: str = ""
    recommended_interviews: list[InterviewRecommendation] = []


class InterviewMetadata(CamelModel):
    role: str = ""
    level: str = ""
    tech_stack: list[str] = []
    session_id: str | None = None


class ComprehensiveResultsResponse(CamelModel):
    results: ComprehensiveReport
    resume_analysis: ResumeSummary
    interview_metadata: InterviewMetadata
    degraded: bool = False
    meta: ModelMeta = ModelMeta()
