"""Inter-stage Pydantic contracts for the model pipeline and interview sessions."""

from models.schemas.model_io import ModelRequest, ModelResponse, ResponseType
from models.schemas.session import ConversationEntry, InterviewContext, InterviewSession

__all__ = [
    "ModelRequest",
    "ModelResponse",
    "ResponseType",
    "ConversationEntry",
    "InterviewContext",
    "InterviewSession",
]
