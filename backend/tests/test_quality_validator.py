from models.schemas.model_io import ResponseType
from services.quality_validator import validate


def test_empty_reply_scores_zero():
    metrics = validate("   ")
    assert metrics.score == 0.0
    assert metrics.issues == ["Empty response"]


def test_clean_interview_reply():
    metrics = validate(
        "Thanks for sharing that. How did you decide between PostgreSQL and MongoDB for the project?",
        ResponseType.INTERVIEW,
    )
    assert metrics.score == 1.0
    assert metrics.issues == []


def test_placeholder_text_penalised():
    metrics = validate("Your strongest skill is [placeholder] and you did well.")
    assert metrics.score == 0.6
    assert "Contains placeholder text" in metrics.issues


def test_feedback_without_assessment_or_advice():
    metrics = validate("The candidate spoke about their projects at length.", ResponseType.FEEDBACK)
    assert "Missing performance assessment" in metrics.issues
    assert "Missing improvement suggestions" in metrics.issues
    assert metrics.score < 0.7


def test_json_reply_without_object():
    metrics = validate("Sorry, I cannot produce that analysis right now.", ResponseType.JSON)
    assert "No JSON object in response" in metrics.issues
    assert metrics.score == 0.5


def test_score_never_negative():
    text = "xxx tbd [insert] to be continued..."
    assert validate(text, ResponseType.JSON).score == 0.0
