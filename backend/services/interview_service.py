"""Interview practice: question sets, the interviewer conversation and final feedback."""

import logging

from config import settings
from models.responses import InterviewFeedback, QuestionSet
from models.schemas.model_io import ModelRequest, ModelResponse, ResponseType
from models.schemas.session import InterviewContext, InterviewSession
from services import gemini_client, prompt_builder
from services.response_parser import parse_structured
from services.session_store import SessionStore

logger = logging.getLogger(__name__)

OPENING_REPLY = (
    "Hi! I'm Sarah, your AI interviewer. I'm excited to learn about your experience "
    "and skills. Let's start with a simple question: Can you tell me about yourself "
    "and what interests you about this role?"
)
TECHNICAL_REPLY = (
    "That's interesting! Can you walk me through how you would approach solving a "
    "complex technical problem? What's your process?"
)
FOLLOW_UP_REPLY = (
    "Great answer! Can you give me a specific example of when you've applied that "
    "skill in a real project?"
)
_TECHNICAL_HINTS = ("technical", "code", "coding", "system", "architecture", "algorithm")


def canned_reply(candidate_message: str = "", context: InterviewContext | None = None) -> str:
    """Interviewer line used when the model is unavailable, so the interview can go on."""
    lowered = candidate_message.lower()
    if not lowered.strip():
        return OPENING_REPLY
    hints = _TECHNICAL_HINTS + tuple(s.lower() for s in (context.tech_stack if context else []))
    if any(h in lowered for h in hints):
        return TECHNICAL_REPLY
    return FOLLOW_UP_REPLY


def _reply_text(response: ModelResponse, candidate_message: str, context: InterviewContext) -> str:
    if response.success and response.raw_text.strip():
        return response.raw_text.strip()
    logger.warning("Interviewer model unavailable, using canned reply")
    return canned_reply(candidate_message, context)


def _interview_request(prompt: str, session: InterviewSession) -> ModelRequest:
    return ModelRequest(
        prompt=prompt,
        response_type=ResponseType.INTERVIEW,
        model_id=settings.interview_model,
        user_id=session.user_id,
        context={"session_id": session.session_id, "turn": len(session.conversation)},
    )


async def generate_questions(
    role: str,
    level: str,
    tech_stack: list[str],
    count: int = 5,
    user_id: str | None = None,
) -> tuple[QuestionSet, ModelResponse]:
    prompt = prompt_builder.build_question_set_prompt(role, level, tech_stack, count)
    response = await gemini_client.invoke(
        ModelRequest(
            prompt=prompt,
            response_type=ResponseType.JSON,
            model_id=settings.fast_model,
            user_id=user_id,
        )
    )
    questions = parse_structured(
        response.raw_text,
        QuestionSet,
        {"role": role, "level": level, "tech_stack": tech_stack, "count": count},
    )
    if len(questions.questions) > count:
        questions = questions.model_copy(update={"questions": questions.questions[:count]})
    return questions, response


async def start_interview(
    store: SessionStore,
    context: InterviewContext,
    resume_summary: dict | None = None,
    user_id: str | None = None,
) -> tuple[InterviewSession, str, ModelResponse]:
    session = store.create(context, user_id=user_id, resume_summary=resume_summary)
    prompt = prompt_builder.build_interview_opening_prompt(context, resume_summary)
    response = await gemini_client.invoke(_interview_request(prompt, session))
    greeting = _reply_text(response, "", context)
    store.add_message(session.session_id, "ai", greeting, kind="greeting")
    return session, greeting, response


async def respond(store: SessionStore, session_id: str, message: str) -> tuple[str, ModelResponse]:
    """One text turn: record the answer, ask the next question."""
    session = store.get(session_id)
    prompt = prompt_builder.build_interview_turn_prompt(
        session.context, session.transcript_text(), message
    )
    store.add_message(session_id, "user", message, kind="answer")
    response = await gemini_client.invoke(_interview_request(prompt, session))
    reply = _reply_text(response, message, session.context)
    store.add_message(session_id, "ai", reply, kind="question")
    return reply, response


async def voice_respond(store: SessionStore, session_id: str, spoken_text: str) -> tuple[str, ModelResponse]:
    """One voice turn. Same as ``respond`` with a reply meant to be spoken."""
    session = store.get(session_id)
    prompt = prompt_builder.build_voice_turn_prompt(
        session.context, session.transcript_text(), spoken_text
    )
    store.add_message(session_id, "user", spoken_text, kind="answer")
    response = await gemini_client.invoke(_interview_request(prompt, session))
    reply = _reply_text(response, spoken_text, session.context)
    store.add_message(session_id, "ai", reply, kind="question")
    return reply, response


async def final_feedback(
    context: InterviewContext,
    transcript: str,
    user_id: str | None = None,
) -> tuple[InterviewFeedback, ModelResponse]:
    prompt = prompt_builder.build_final_feedback_prompt(context, transcript)
    response = await gemini_client.invoke(
        ModelRequest(
            prompt=prompt,
            response_type=ResponseType.FEEDBACK,
            model_id=settings.feedback_model,
            user_id=user_id,
        )
    )
    feedback = parse_structured(response.raw_text, InterviewFeedback, context.model_dump())
    return feedback, response


async def end_interview(
    store: SessionStore, session_id: str
) -> tuple[InterviewSession, InterviewFeedback, ModelResponse]:
    session = store.end(session_id)
    feedback, response = await final_feedback(
        session.context, session.transcript_text(), session.user_id
    )
    return session, feedback, response
