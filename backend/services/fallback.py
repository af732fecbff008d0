"""Heuristic fallback results for model replies that carry no usable JSON.

Scores are scanned out of the raw text with loose regexes; everything the
text cannot supply comes from fixed generic defaults, so the returned object
is always complete. The raw reply is kept in ``raw_analysis``. Nothing in
this module may raise on any input string.
"""

import re
from typing import Any, Callable

from models.responses import (
    ComprehensiveReport,
    InterviewFeedback,
    InterviewQuestion,
    InterviewRecommendation,
    Keywords,
    PerformanceScores,
    QuestionSet,
    ResumeAlignment,
    ResumeAnalysis,
)

DEFAULT_OVERALL_SCORE = 75
DEFAULT_ATS_SCORE = 80
DEFAULT_INDUSTRY_MATCH = 85
DEFAULT_PERFORMANCE = {
    "technical": 78,
    "communication": 82,
    "problem_solving": 75,
    "confidence": 70,
}
DEFAULT_DURATION = "15 minutes"
DEFAULT_QUESTIONS_ANSWERED = 5

# '.' does not cross newlines, so each scan stays on one line.
OVERALL_SCORE_RE = re.compile(r"overall.*?score.*?(\d+)", re.IGNORECASE)
ATS_SCORE_RE = re.compile(r"\bats\b.*?(\d+)", re.IGNORECASE)
PERFORMANCE_RES = {
    "technical": re.compile(r"technical.*?(\d+)", re.IGNORECASE),
    "communication": re.compile(r"communication.*?(\d+)", re.IGNORECASE),
    "problem_solving": re.compile(r"problem[\s-]*solving.*?(\d+)", re.IGNORECASE),
    "confidence": re.compile(r"confidence.*?(\d+)", re.IGNORECASE),
}
_QUESTION_LINE_RE = re.compile(r"^\s*(?:\d{1,2}[.)]|[-*•])\s+(.+\?)\s*$", re.MULTILINE)
_BEHAVIORAL_RE = re.compile(r"tell me about a time|describe a (?:time|situation)|give (?:me )?an example", re.IGNORECASE)


def scan_score(text: str, pattern: re.Pattern, default: int) -> int:
    """First number captured by ``pattern``, clamped to 0-100, else ``default``."""
    match = pattern.search(text)
    if not match:
        return default
    digits = match.group(1).lstrip("0") or "0"
    if len(digits) > 3:
        return 100
    return min(100, int(digits))


def infer_experience_level(text: str) -> str:
    lowered = text.lower()
    if "senior" in lowered:
        return "senior"
    if "junior" in lowered:
        return "entry"
    return "mid"


def _scan_performance(text: str) -> PerformanceScores:
    return PerformanceScores(**{
        name: scan_score(text, pattern, DEFAULT_PERFORMANCE[name])
        for name, pattern in PERFORMANCE_RES.items()
    })


def synthesize_resume_analysis(raw_text: str, context: dict[str, Any]) -> ResumeAnalysis:
    return ResumeAnalysis(
        overall_score=scan_score(raw_text, OVERALL_SCORE_RE, DEFAULT_OVERALL_SCORE),
        ats_compatibility=scan_score(raw_text, ATS_SCORE_RE, DEFAULT_ATS_SCORE),
        industry_match=DEFAULT_INDUSTRY_MATCH,
        experience_level=infer_experience_level(raw_text),
        detected_role="Software Engineer",
        detected_industry="Technology",
        strengths=[
            "Strong technical background",
            "Relevant experience",
            "Good skill set",
            "Clear work history",
        ],
        improvements=[
            "Add quantified achievements",
            "Include more technical skills",
            "Improve formatting",
            "Add certifications",
        ],
        keywords=Keywords(
            present=["JavaScript", "React", "Node.js", "AWS"],
            missing=["Docker", "Kubernetes", "CI/CD", "Testing"],
        ),
        recommended_interviews=[
            InterviewRecommendation(
                category="fullstack",
                name="Full Stack Developer",
                match=90,
                reason="Strong match with frontend and backend experience",
            ),
            InterviewRecommendation(
                category="frontend",
                name="Frontend Developer",
                match=85,
                reason="Excellent React and JavaScript skills",
            ),
            InterviewRecommendation(
                category="backend",
                name="Backend Developer",
                match=80,
                reason="Good Node.js and database experience",
            ),
        ],
        next_steps=[
            "Practice system design questions",
            "Review behavioral interview questions",
            "Prepare project examples",
        ],
        raw_analysis=raw_text,
        structured=False,
    )


def synthesize_interview_feedback(raw_text: str, context: dict[str, Any]) -> InterviewFeedback:
    return InterviewFeedback(
        overall_score=scan_score(raw_text, OVERALL_SCORE_RE, DEFAULT_OVERALL_SCORE),
        performance=_scan_performance(raw_text),
        strengths=[
            "Good technical knowledge demonstrated",
            "Clear communication style",
            "Structured problem-solving approach",
        ],
        improvements=[
            "Provide more specific examples",
            "Practice explaining complex concepts simply",
            "Work on confidence in responses",
        ],
        next_steps=[
            "Practice behavioral questions",
            "Review system design concepts",
            "Prepare specific project examples",
        ],
        summary="Good effort! You showed solid understanding and communicated clearly. "
                "Keep practicing with concrete examples from your own projects.",
        raw_analysis=raw_text,
        structured=False,
    )


def synthesize_comprehensive_report(raw_text: str, context: dict[str, Any]) -> ComprehensiveReport:
    duration = context.get("duration") or DEFAULT_DURATION
    answered = context.get("questions_answered")
    if not isinstance(answered, int) or isinstance(answered, bool) or answered < 0:
        answered = DEFAULT_QUESTIONS_ANSWERED

    return ComprehensiveReport(
        overall_score=scan_score(raw_text, OVERALL_SCORE_RE, DEFAULT_OVERALL_SCORE),
        duration=str(duration),
        questions_answered=answered,
        performance=_scan_performance(raw_text),
        strengths=[
            "Good technical knowledge demonstrated",
            "Clear communication style",
            "Structured problem-solving approach",
        ],
        improvements=[
            "Provide more specific examples",
            "Practice explaining complex concepts simply",
            "Work on confidence in responses",
        ],
        resume_alignment=ResumeAlignment(
            score=85,
            gaps=["Could elaborate more on recent projects"],
            highlights=["Experience matches role requirements well"],
        ),
        next_steps=[
            "Practice behavioral questions",
            "Review system design concepts",
            "Prepare specific project examples",
        ],
        recommended_practice=[
            "Mock technical interviews",
            "System design practice",
            "Behavioral question preparation",
        ],
        raw_analysis=raw_text,
        structured=False,
    )


def _generic_questions(role: str, stack: str) -> list[InterviewQuestion]:
    return [
        InterviewQuestion(
            id=1, type="behavioral", difficulty="easy", time_allocation="2-3 minutes",
            question=f"Tell me about yourself and what drew you to the {role} role.",
            follow_ups=["What are you most proud of so far?"],
            expected_elements=["Concise career summary", "Motivation for the role"],
        ),
        InterviewQuestion(
            id=2, type="technical", difficulty="easy", time_allocation="3-4 minutes",
            question=f"Walk me through a recent project where you used {stack}. What was your role?",
            follow_ups=["What would you do differently today?"],
            expected_elements=["Clear ownership", "Technical decisions explained"],
        ),
        InterviewQuestion(
            id=3, type="technical", difficulty="medium", time_allocation="4-5 minutes",
            question="Describe a challenging technical problem you solved. How did you approach it?",
            follow_ups=["How did you verify the fix?"],
            expected_elements=["Problem decomposition", "Trade-offs considered"],
        ),
        InterviewQuestion(
            id=4, type="behavioral", difficulty="medium", time_allocation="3-4 minutes",
            question="Tell me about a time you disagreed with a teammate. How did you resolve it?",
            follow_ups=["What was the outcome for the project?"],
            expected_elements=["STAR method", "Constructive resolution"],
        ),
        InterviewQuestion(
            id=5, type="technical", difficulty="hard", time_allocation="5-7 minutes",
            question=f"How would you design a scalable system for a core feature you would own in a {role} role?",
            follow_ups=["Where are the bottlenecks?", "How would you monitor it?"],
            expected_elements=["Requirements clarification", "Scalability trade-offs"],
        ),
    ]


def synthesize_question_set(raw_text: str, context: dict[str, Any]) -> QuestionSet:
    """Recover numbered/bulleted question lines, else use a generic set."""
    count = context.get("count")
    if not isinstance(count, int) or isinstance(count, bool) or count < 1:
        count = 5

    found = [m.group(1).strip() for m in _QUESTION_LINE_RE.finditer(raw_text)]
    if found:
        questions = [
            InterviewQuestion(
                id=i,
                type="behavioral" if _BEHAVIORAL_RE.search(q) else "technical",
                question=q,
            )
            for i, q in enumerate(found[:count], start=1)
        ]
    else:
        role = str(context.get("role") or "Software Engineer")
        stack = ", ".join(str(s) for s in context.get("tech_stack") or []) or "your main tools"
        questions = _generic_questions(role, stack)[:count]

    return QuestionSet(questions=questions, raw_analysis=raw_text, structured=False)


_SYNTHESIZERS: dict[type, Callable[[str, dict[str, Any]], Any]] = {
    ResumeAnalysis: synthesize_resume_analysis,
    InterviewFeedback: synthesize_interview_feedback,
    ComprehensiveReport: synthesize_comprehensive_report,
    QuestionSet: synthesize_question_set,
}


def synthesize(result_cls: type, raw_text: str, context: dict[str, Any] | None = None) -> Any:
    """Build a complete fallback ``result_cls`` from unstructured text."""
    synthesizer = _SYNTHESIZERS[result_cls]
    return synthesizer(raw_text or "", context or {})
