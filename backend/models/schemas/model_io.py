"""Contracts between the prompt builder, the model invoker and the extractor."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class ResponseType(str, Enum):
    """Which generation profile and expected output a model call uses."""

    GENERAL = "general"
    INTERVIEW = "interview"
    FEEDBACK = "feedback"
    JSON = "json"


class ModelRequest(BaseModel):
    """One call to the completion capability. Built per call, never mutated."""

    model_config = ConfigDict(frozen=True)

    prompt: str
    response_type: ResponseType = ResponseType.GENERAL
    model_id: str
    user_id: str | None = None
    context: dict[str, Any] | None = None


class ModelResponse(BaseModel):
    """What the invoker hands to the extractor.

    On failure ``success`` is False and ``raw_text`` carries the diagnostic.
    ``quality_score`` is advisory (0-1).
    """

    model_config = ConfigDict(frozen=True)

    raw_text: str
    success: bool
    model_id: str
    processing_time_ms: int = 0
    quality_score: float = 0.0
    retry_count: int = 0
    cached: bool = False
