"""Heuristic response evaluator with an explicit follow-up decision table."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Set, Tuple

from agents.types import (
    CandidateResponse,
    FollowUpReason,
    InterviewQuestion,
    JobRole,
    ResponseEvaluation,
)
from config.markers import marker_engine
from config.settings import settings

_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")
_SKILL_SPLIT = re.compile(r"\s*(?:/|&|,|\band\b)\s*")

DIMENSION_REASONS: Tuple[Tuple[str, FollowUpReason], ...] = (
    ("depth", "insufficient_depth"),
    ("clarity", "unclear"),
    ("completeness", "incomplete"),
)


def word_count(text: Optional[str]) -> int:
    """Approximate word count using whitespace splitting."""

    if not text:
        return 0
    return len(text.strip().split())


def _round_1dp(value: float) -> float:
    return float(f"{value:.1f}")


def _clamp(value: float, low: float = 0.0, high: float = 10.0) -> float:
    return _round_1dp(max(low, min(high, value)))


def sentences(text: str) -> List[str]:
    parts = _SENTENCE_SPLIT.split((text or "").strip())
    return [part for part in parts if part.strip()]


def score_depth(text: str) -> float:
    """Word volume saturating at DEPTH_SATURATION_WORDS plus reasoning markers."""

    words = word_count(text)
    if words == 0:
        return 0.0
    saturation = max(1, settings.DEPTH_SATURATION_WORDS)
    volume = 6.0 * min(words, saturation) / saturation
    engine = marker_engine()
    causal = engine.count(text, "causal")
    techniques = engine.count_terms(text, "technical")
    reasoning = min(4.0, 1.0 * causal + 0.5 * techniques)
    return _clamp(volume + reasoning)


def score_clarity(text: str) -> float:
    words = word_count(text)
    if words == 0:
        return 0.0
    engine = marker_engine()
    score = 5.0
    if words < settings.CLARITY_MIN_WORDS:
        score -= 3.0
    score += min(3.0, float(engine.count(text, "connector")))
    parts = sentences(text)
    if len(parts) > 1:
        score += 1.0
    average = words / max(1, len(parts))
    if average > settings.RUN_ON_SENTENCE_WORDS:
        score -= 2.0
    elif average >= 8:
        score += 1.0
    score -= min(2.0, 0.5 * engine.count(text, "filler"))
    return _clamp(score)


def score_completeness(text: str, expected_elements: List[str], depth: float, clarity: float) -> float:
    """Share of expected elements mentioned, or the depth/clarity mean when none are set."""

    if not word_count(text):
        return 0.0
    expected = [element.strip().lower() for element in expected_elements if element.strip()]
    if not expected:
        return _clamp((depth + clarity) / 2)
    lowered = text.lower()
    covered = sum(1 for element in expected if element in lowered)
    return _clamp(10.0 * covered / len(expected))


def role_terms(role: Optional[JobRole]) -> Set[str]:
    """Lower-cased technical vocabulary for ``role``."""

    if role is None:
        return set(marker_engine().terms("technical"))
    terms: Set[str] = set()
    for skill in role.technical_skills:
        lowered = skill.lower()
        terms.add(lowered)
        for part in _SKILL_SPLIT.split(lowered):
            if len(part) >= 2:
                terms.add(part.strip())
    return {term for term in terms if term}


def mentioned_terms(text: str, terms: Set[str]) -> Set[str]:
    lowered = (text or "").lower()
    found: Set[str] = set()
    for term in terms:
        if re.search(rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9])", lowered):
            found.add(term)
    return found


def score_technical_accuracy(text: str, question: InterviewQuestion, role: Optional[JobRole]) -> float:
    if not word_count(text):
        return 0.0
    vocabulary = role_terms(role) | set(marker_engine().category_keywords(question.category))
    hits = len(mentioned_terms(text, vocabulary))
    score = 2.0 + 2.0 * hits
    if marker_engine().count(text, "example"):
        score += 1.0
    return _clamp(score)


# ----------------------------------------------------------------------
# Follow-up decision table
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class EvaluationSignals:
    words: int
    depth: float
    clarity: float
    completeness: float

    def low_dimensions(self) -> List[Tuple[str, float]]:
        threshold = settings.FOLLOW_UP_THRESHOLD
        scores = (("depth", self.depth), ("clarity", self.clarity), ("completeness", self.completeness))
        return [(name, value) for name, value in scores if value < threshold]

    def dominant_deficiency(self) -> FollowUpReason:
        name, _ = min(self.low_dimensions(), key=lambda pair: pair[1])
        return dict(DIMENSION_REASONS)[name]


@dataclass(frozen=True)
class FollowUpRule:
    name: str
    applies: Callable[[EvaluationSignals], bool]
    reason: Callable[[EvaluationSignals], FollowUpReason]


FOLLOW_UP_RULES: List[FollowUpRule] = [
    FollowUpRule("empty", lambda s: s.words == 0, lambda s: "no_response"),
    FollowUpRule("too_short", lambda s: s.words < settings.FOLLOW_UP_MIN_WORDS, lambda s: "too_short"),
    FollowUpRule("low_quality", lambda s: len(s.low_dimensions()) >= 2, lambda s: s.dominant_deficiency()),
]


def decide_follow_up(signals: EvaluationSignals) -> Tuple[bool, Optional[FollowUpReason]]:
    """Return ``(needs_follow_up, reason)`` from the first matching rule."""

    for rule in FOLLOW_UP_RULES:
        if rule.applies(signals):
            return True, rule.reason(signals)
    return False, None


def evaluate_response(
    question: InterviewQuestion,
    response: CandidateResponse,
    role: Optional[JobRole] = None,
) -> ResponseEvaluation:
    """Score ``response`` against ``question``; empty text yields minimum scores."""

    text = response.text or ""
    words = word_count(text)
    depth = score_depth(text)
    clarity = score_clarity(text)
    completeness = score_completeness(text, question.expected_elements, depth, clarity)
    needs_follow_up, reason = decide_follow_up(
        EvaluationSignals(words=words, depth=depth, clarity=clarity, completeness=completeness)
    )
    accuracy = score_technical_accuracy(text, question, role) if question.type == "technical" else None
    return ResponseEvaluation(
        question_id=question.id,
        depth_score=depth,
        clarity_score=clarity,
        completeness_score=completeness,
        needs_follow_up=needs_follow_up,
        follow_up_reason=reason,
        technical_accuracy=accuracy,
    )


__all__ = [
    "EvaluationSignals",
    "FOLLOW_UP_RULES",
    "FollowUpRule",
    "decide_follow_up",
    "evaluate_response",
    "mentioned_terms",
    "role_terms",
    "score_clarity",
    "score_completeness",
    "score_depth",
    "score_technical_accuracy",
    "sentences",
    "word_count",
]
