"""Résumé analysis: prompt, model call, structured extraction.

Pipeline:
1. Build the analysis prompt for the requested interview category
2. Invoke the resume-analysis model (JSON profile)
3. Extract the structured analysis, falling back to text heuristics
"""

import logging

from config import settings
from models.responses import ResumeAnalysis, ResumeSummary
from models.schemas.model_io import ModelRequest, ModelResponse, ResponseType
from services import gemini_client, prompt_builder
from services.response_parser import parse_structured

logger = logging.getLogger(__name__)


def is_degraded(result, response: ModelResponse) -> bool:
    """True when the caller got heuristic output instead of the model's JSON."""
    return not (response.success and result.structured)


async def analyze(
    resume_text: str,
    category: str = "general",
    user_id: str | None = None,
) -> tuple[ResumeAnalysis, ModelResponse]:
    prompt = prompt_builder.build_resume_analysis_prompt(resume_text, category)
    response = await gemini_client.invoke(
        ModelRequest(
            prompt=prompt,
            response_type=ResponseType.JSON,
            model_id=settings.resume_analysis_model,
            user_id=user_id,
            context={"category": category},
        )
    )
    if not response.success:
        logger.warning("Resume analysis model unavailable, using heuristic analysis")

    analysis = parse_structured(response.raw_text, ResumeAnalysis)
    logger.info(
        "Resume analysed: overall=%d ats=%d level=%s structured=%s",
        analysis.overall_score, analysis.ats_compatibility,
        analysis.experience_level, analysis.structured,
    )
    return analysis, response


def summarize(analysis: ResumeAnalysis) -> ResumeSummary:
    """The slice of an analysis carried alongside interview results."""
    return ResumeSummary(
        overall_score=analysis.overall_score,
        ats_compatibility=analysis.ats_compatibility,
        detected_role=analysis.detected_role,
        experience_level=analysis.experience_level,
        recommended_interviews=analysis.recommended_interviews,
    )
