import json

import pytest

from models.responses import ComprehensiveReport, InterviewFeedback, QuestionSet, ResumeAnalysis
from services.response_parser import extract_json, json_candidate, parse_structured

RESULT_TYPES = [ResumeAnalysis, QuestionSet, InterviewFeedback, ComprehensiveReport]

WELL_FORMED = json.dumps({
    "overallScore": 88,
    "atsCompatibility": 72,
    "industryMatch": 90,
    "experienceLevel": "senior",
    "detectedRole": "Backend Engineer",
    "detectedIndustry": "Fintech",
    "strengths": ["Python", "Distributed systems"],
    "improvements": ["Quantify impact"],
    "keywords": {"present": ["Kafka"], "missing": ["Terraform"]},
    "recommendedInterviews": [
        {"category": "backend-developer", "name": "Backend Developer", "match": 92, "reason": "APIs"}
    ],
    "nextSteps": ["Practice system design"],
})


# --- Scenarios ---


def test_plain_json_object():
    result = parse_structured('{"overallScore": 90, "strengths": ["x"]}', ResumeAnalysis)
    assert result.structured is True
    assert result.overall_score == 90
    assert result.strengths == ["x"]
    assert result.improvements == []


def test_fenced_json_object():
    result = parse_structured('```json\n{"overallScore": 90}\n```', ResumeAnalysis)
    assert result.structured is True
    assert result.overall_score == 90


def test_prose_without_json_uses_default_score():
    result = parse_structured("I think your resume is great. Score: around 85/100.", ResumeAnalysis)
    assert result.structured is False
    assert result.overall_score == 75
    assert result.raw_analysis == "I think your resume is great. Score: around 85/100."


def test_empty_input_falls_back():
    result = parse_structured("", ResumeAnalysis)
    assert result.structured is False
    assert result.overall_score == 75
    assert result.ats_compatibility == 80
    assert result.experience_level == "mid"


def test_none_input_falls_back():
    assert parse_structured(None, InterviewFeedback).structured is False


# --- Candidate selection ---


@pytest.mark.parametrize("wrapped", [
    WELL_FORMED,
    "```json\n" + WELL_FORMED + "\n```",
    "Here is the analysis:\n" + WELL_FORMED + "\nLet me know if you need more.",
])
def test_wrapping_does_not_change_result(wrapped):
    expected = parse_structured(WELL_FORMED, ResumeAnalysis)
    assert parse_structured(wrapped, ResumeAnalysis) == expected
    assert expected.structured is True
    assert expected.keywords.missing == ["Terraform"]


def test_fence_wins_over_stray_braces():
    text = 'Note {not json} here.\n```json\n{"overallScore": 61}\n```\nAnd a stray } brace.'
    assert json_candidate(text) == '{"overallScore": 61}'
    result = parse_structured(text, ResumeAnalysis)
    assert result.structured is True
    assert result.overall_score == 61


def test_greedy_brace_span_over_two_objects_falls_back():
    text = 'First: {"overallScore": 90} and then another {"overallScore": 40} done.'
    assert json_candidate(text) == '{"overallScore": 90} and then another {"overallScore": 40}'
    result = parse_structured(text, ResumeAnalysis)
    assert result.structured is False


def test_unclosed_fence_uses_whole_text():
    text = '```json\n{"overallScore": 90}'
    assert json_candidate(text) == text
    assert parse_structured(text, ResumeAnalysis).structured is False


def test_bare_fence_without_json_tag_uses_brace_span():
    text = '```\n{"overallScore": 70}\n```'
    assert parse_structured(text, ResumeAnalysis).overall_score == 70


def test_non_object_json_falls_back():
    assert extract_json("[1, 2, 3]") is None
    assert extract_json('"just a string"') is None
    assert parse_structured("[1, 2, 3]", InterviewFeedback).structured is False


def test_deeply_nested_input_does_not_raise():
    text = "[" * 100_000 + "]" * 100_000
    assert extract_json(text) is None
    assert parse_structured(text, ComprehensiveReport).structured is False


# --- Lenient validation ---


def test_wrong_typed_fields_take_defaults():
    text = '{"overallScore": "great", "strengths": "one string", "improvements": ["a"]}'
    result = parse_structured(text, ResumeAnalysis)
    assert result.structured is True
    assert result.overall_score == 0
    assert result.strengths == []
    assert result.improvements == ["a"]


def test_scores_are_clamped_and_rounded():
    result = parse_structured('{"overallScore": 140, "atsCompatibility": "67.6%"}', ResumeAnalysis)
    assert result.overall_score == 100
    assert result.ats_compatibility == 68


def test_experience_level_is_normalised():
    assert parse_structured('{"experienceLevel": "Senior"}', ResumeAnalysis).experience_level == "senior"
    assert parse_structured('{"experienceLevel": "guru"}', ResumeAnalysis).experience_level == "mid"


def test_snake_case_keys_accepted():
    result = parse_structured('{"overall_score": 66, "next_steps": ["Apply"]}', InterviewFeedback)
    assert result.overall_score == 66
    assert result.next_steps == ["Apply"]


# --- Total population ---


@pytest.mark.parametrize("result_cls", RESULT_TYPES)
@pytest.mark.parametrize("raw", [
    "",
    "\x00\xff\xfe garbage \x01",
    "{",
    "}{",
    '{"overallScore": ',
    "```json\n```",
    '{"performance": {"technical": "high"}, "questions": [{"id": "q1"}]}',
    "Overall score: 63. Technical 70, communication 80.",
    WELL_FORMED,
    '{"overallScore": Infinity, "atsCompatibility": NaN}',
    '{"overallScore": 1e400}',
    '{"overallScore": 1' + "0" * 400 + "}",
    '{"overallScore": "inf", "performance": {"technical": "-Infinity"}}',
])
def test_every_field_populated(result_cls, raw):
    result = parse_structured(raw, result_cls)
    assert isinstance(result, result_cls)
    dumped = result.model_dump()
    assert set(dumped) == set(result_cls.model_fields)
    for name, field in result_cls.model_fields.items():
        assert dumped[name] is not None, name
    assert isinstance(result.structured, bool)


@pytest.mark.parametrize("raw", [
    '{"overallScore": Infinity, "strengths": ["x"]}',
    '{"overallScore": 1e400, "strengths": ["x"]}',
    '{"overallScore": 1' + "0" * 400 + ', "strengths": ["x"]}',
    '{"overallScore": "inf", "strengths": ["x"]}',
])
def test_non_finite_scores_take_default(raw):
    result = parse_structured(raw, ResumeAnalysis)
    assert result.structured is True
    assert result.overall_score == 0
    assert result.strengths == ["x"]
