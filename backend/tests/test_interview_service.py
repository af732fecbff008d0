import asyncio

from models.schemas.session import InterviewContext
from services import interview_service, report_service
from services.interview_service import FOLLOW_UP_REPLY, OPENING_REPLY, TECHNICAL_REPLY, canned_reply
from services.session_store import SessionStore

CONTEXT = InterviewContext(role="Mobile Developer", level="mid", tech_stack=["Kotlin"])


def test_canned_replies():
    assert canned_reply("") == OPENING_REPLY
    assert canned_reply("I wrote the code for checkout") == TECHNICAL_REPLY
    assert canned_reply("Mostly Kotlin these days", CONTEXT) == TECHNICAL_REPLY
    assert canned_reply("I enjoy working with people") == FOLLOW_UP_REPLY


def test_count_answers():
    transcript = "Interviewer: Hi\nCandidate: Hello\nuser: again\nInterviewer: Bye"
    assert report_service.count_answers(transcript) == 2
    assert report_service.count_answers("") == 0


def test_generate_questions_truncates_to_count(fake_model):
    fake_model.replies = ['{"questions": [{"question": "a?"}, {"question": "b?"}, {"question": "c?"}]}']
    questions, response = asyncio.run(
        interview_service.generate_questions("Dev", "mid", ["Go"], count=2)
    )
    assert response.success is True
    assert [q.question for q in questions.questions] == ["a?", "b?"]


def test_turn_prompt_sees_earlier_conversation(fake_model):
    fake_model.replies = ["Welcome, tell me about yourself?", "Why Kotlin?"]
    store = SessionStore()
    session, greeting, _ = asyncio.run(interview_service.start_interview(store, CONTEXT))
    reply, _ = asyncio.run(interview_service.respond(store, session.session_id, "I build Android apps."))

    assert reply == "Why Kotlin?"
    turn_prompt = fake_model.requests[1].prompt
    assert f"Interviewer: {greeting}" in turn_prompt
    assert '"I build Android apps."' in turn_prompt
    assert [e.kind for e in session.conversation] == ["greeting", "answer", "question"]


def test_end_interview_removes_session(fake_model):
    fake_model.replies = ["Hello?", '{"overallScore": 70}']
    store = SessionStore()
    session, _, _ = asyncio.run(interview_service.start_interview(store, CONTEXT))
    ended, feedback, _ = asyncio.run(interview_service.end_interview(store, session.session_id))
    assert ended.status == "completed"
    assert feedback.overall_score == 70
    assert len(store) == 0
