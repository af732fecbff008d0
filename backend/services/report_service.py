"""Comprehensive results: résumé analysis and interview performance in one report."""

import logging
import re

from config import settings
from models.responses import ComprehensiveReport, ResumeAnalysis
from models.schemas.model_io import ModelRequest, ModelResponse, ResponseType
from models.schemas.session import InterviewContext
from services import gemini_client, prompt_builder
from services.fallback import DEFAULT_DURATION
from services.response_parser import parse_structured

logger = logging.getLogger(__name__)

_CANDIDATE_LINE_RE = re.compile(r"^\s*(?:candidate|user)\s*:", re.IGNORECASE | re.MULTILINE)


def count_answers(transcript: str) -> int:
    """Number of candidate lines in an 'Interviewer:/Candidate:' transcript."""
    return len(_CANDIDATE_LINE_RE.findall(transcript))


async def comprehensive_report(
    resume_analysis: ResumeAnalysis,
    transcript: str,
    context: InterviewContext,
    user_id: str | None = None,
) -> tuple[ComprehensiveReport, ModelResponse]:
    resume_data = resume_analysis.model_dump(
        by_alias=True, exclude={"raw_analysis", "structured", "kind"}
    )
    prompt = prompt_builder.build_comprehensive_report_prompt(context, transcript, resume_data)
    response = await gemini_client.invoke(
        ModelRequest(
            prompt=prompt,
            response_type=ResponseType.FEEDBACK,
            model_id=settings.feedback_model,
            user_id=user_id,
        )
    )

    fallback_context = {
        "duration": context.duration or DEFAULT_DURATION,
        "questions_answered": count_answers(transcript) or None,
    }
    report = parse_structured(response.raw_text, ComprehensiveReport, fallback_context)
    logger.info(
        "Comprehensive report for %s: overall=%d structured=%s",
        context.role, report.overall_score, report.structured,
    )
    return report, response
