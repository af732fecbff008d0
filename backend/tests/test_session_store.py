from datetime import datetime, timedelta, timezone

import pytest

from models.schemas.session import InterviewContext
from services.session_store import SessionNotFoundError, SessionStore

CONTEXT = InterviewContext(role="Frontend Developer", level="entry", tech_stack=["React"])


def test_create_and_get():
    store = SessionStore()
    session = store.create(CONTEXT, user_id="u1", resume_summary={"overallScore": 80})
    assert session.session_id.startswith("s_")
    assert store.get(session.session_id) is session
    assert session.status == "active"
    assert session.resume_summary == {"overallScore": 80}
    assert len(store) == 1


def test_session_ids_are_unique():
    store = SessionStore()
    ids = {store.create(CONTEXT).session_id for _ in range(20)}
    assert len(ids) == 20


def test_add_message_and_transcript():
    store = SessionStore()
    session = store.create(CONTEXT)
    store.add_message(session.session_id, "ai", "Tell me about yourself.", kind="greeting")
    store.add_message(session.session_id, "user", "I build UIs.", kind="answer")
    assert session.transcript_text() == "Interviewer: Tell me about yourself.\nCandidate: I build UIs."
    assert session.answers_given == 1
    assert session.last_activity == session.conversation[-1].timestamp


def test_end_removes_session():
    store = SessionStore()
    session = store.create(CONTEXT)
    ended = store.end(session.session_id)
    assert ended.status == "completed"
    assert ended.ended_at is not None
    assert session.session_id not in store
    with pytest.raises(SessionNotFoundError):
        store.end(session.session_id)


def test_unknown_session():
    store = SessionStore()
    with pytest.raises(SessionNotFoundError):
        store.get("missing")
    with pytest.raises(SessionNotFoundError):
        store.add_message("missing", "user", "hi")


def test_prune_expired():
    store = SessionStore(timeout=timedelta(minutes=60))
    stale = store.create(CONTEXT)
    fresh = store.create(CONTEXT)
    stale.last_activity = datetime.now(timezone.utc) - timedelta(minutes=61)

    assert store.prune_expired() == 1
    assert stale.session_id not in store
    assert fresh.session_id in store
    assert stale.status == "abandoned"


def test_create_prunes_idle_sessions():
    store = SessionStore(timeout=timedelta(minutes=1))
    stale = store.create(CONTEXT)
    stale.last_activity = datetime.now(timezone.utc) - timedelta(minutes=5)
    store.create(CONTEXT)
    assert stale.session_id not in store
    assert len(store) == 1
