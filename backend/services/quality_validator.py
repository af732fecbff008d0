"""Advisory quality scoring of raw model replies.

The score (0-1) only gates caching and feeds monitoring; nothing downstream
depends on it for correctness.
"""

import re
from dataclasses import dataclass, field

from models.schemas.model_io import ResponseType

PLACEHOLDERS = ("[placeholder]", "[insert]", "lorem ipsum", "tbd", "xxx")
INCOMPLETE_MARKERS = ("to be continued", "more details needed", "additional information required")
CONVERSATIONAL_WORDS = ("you", "your", "let's", "how", "what", "why", "great", "good", "tell me")
ACTION_WORDS = ("should", "could", "recommend", "suggest", "improve", "add", "consider", "try")
NEGATIVE_WORDS = ("terrible", "awful", "horrible", "worst", "disaster", "pathetic", "useless")


@dataclass
class QualityMetrics:
    score: float = 1.0
    issues: list[str] = field(default_factory=list)

    def penalize(self, amount: float, issue: str) -> None:
        self.score -= amount
        self.issues.append(issue)


def _has_repeated_sentences(content: str) -> bool:
    sentences = [s.strip().lower() for s in re.split(r"[.!?]+", content) if len(s.strip()) > 10]
    return bool(sentences) and len(set(sentences)) < len(sentences) * 0.8


def validate(content: str, response_type: ResponseType = ResponseType.GENERAL) -> QualityMetrics:
    """Score a reply on generic and response-type specific checks."""
    metrics = QualityMetrics()
    if not content or not content.strip():
        return QualityMetrics(score=0.0, issues=["Empty response"])

    lowered = content.lower()

    if len(content) < 10:
        metrics.penalize(0.3, "Response too short")
    if len(content) > 5000:
        metrics.penalize(0.2, "Response too long")
    if _has_repeated_sentences(content):
        metrics.penalize(0.25, "Contains repeated content")
    if any(p in lowered for p in PLACEHOLDERS):
        metrics.penalize(0.4, "Contains placeholder text")
    if any(m in lowered for m in INCOMPLETE_MARKERS) or content.rstrip().endswith("..."):
        metrics.penalize(0.35, "Response appears incomplete")

    if response_type == ResponseType.INTERVIEW:
        if "?" not in content and not any(w in lowered for w in CONVERSATIONAL_WORDS):
            metrics.penalize(0.2, "Lacks conversational tone")
        if len(content) > 800:
            metrics.penalize(0.15, "Interview response too verbose")
    elif response_type == ResponseType.FEEDBACK:
        if "score" not in lowered and "performance" not in lowered:
            metrics.penalize(0.25, "Missing performance assessment")
        if "improve" not in lowered and "recommend" not in lowered:
            metrics.penalize(0.3, "Missing improvement suggestions")
        if any(w in lowered for w in NEGATIVE_WORDS):
            metrics.penalize(0.15, "Tone may be too negative")
    elif response_type == ResponseType.JSON:
        if "{" not in content or "}" not in content:
            metrics.penalize(0.5, "No JSON object in response")

    metrics.score = round(max(0.0, metrics.score), 2)
    return metrics
