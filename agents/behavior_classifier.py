"""Behavior classifier labelling the candidate's communication pattern."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from agents.types import BehaviorType
from config.markers import marker_engine
from config.settings import settings

_ALPHA_TOKEN = re.compile(r"[a-z]+")
_VOWELS = re.compile(r"[aeiouy]")
_ABOUT_THE_QUESTION = re.compile(
    r"\b(?:what|which|how|do you|are you)\b[^?]*\b(?:question|mean|asking|looking for|want)\b[^?]*\?"
)


@dataclass(frozen=True)
class BehaviorSignals:
    """Features extracted once per response and consumed by the rules."""

    text: str
    words: int
    edge_markers: int = 0
    confusion_markers: int = 0
    tangent_markers: int = 0
    technical_terms: int = 0
    gibberish: bool = False
    asks_about_question: bool = False

    @property
    def technical_density(self) -> float:
        return self.technical_terms / self.words if self.words else 0.0


def _is_gibberish(normalized: str) -> bool:
    tokens = _ALPHA_TOKEN.findall(normalized)
    if not tokens:
        return bool(normalized)
    long_tokens = [token for token in tokens if len(token) >= 3]
    if not long_tokens:
        return False
    vowelless = sum(1 for token in long_tokens if not _VOWELS.search(token))
    return vowelless / len(long_tokens) > 0.5


def extract_signals(text: Optional[str]) -> BehaviorSignals:
    engine = marker_engine()
    normalized = engine.normalize(text or "")
    if not normalized:
        return BehaviorSignals(text="", words=0)
    finding = engine.analyze(normalized)
    return BehaviorSignals(
        text=normalized,
        words=len(normalized.split()),
        edge_markers=finding.counts.get("edge_case", 0),
        confusion_markers=finding.counts.get("confusion", 0),
        tangent_markers=finding.counts.get("tangent", 0),
        technical_terms=engine.count_terms(normalized, "technical"),
        gibberish=_is_gibberish(normalized),
        asks_about_question=bool(_ABOUT_THE_QUESTION.search(normalized)),
    )


@dataclass(frozen=True)
class BehaviorRule:
    behavior: BehaviorType
    matches: Callable[[BehaviorSignals], bool]


def _is_edge_case(s: BehaviorSignals) -> bool:
    return not s.text or s.edge_markers > 0 or s.gibberish


def _is_confused(s: BehaviorSignals) -> bool:
    return s.confusion_markers > 0 or s.asks_about_question


def _is_chatty(s: BehaviorSignals) -> bool:
    if s.words > settings.CHATTY_WORD_COUNT:
        return True
    return s.tangent_markers >= settings.CHATTY_TANGENT_MARKERS and s.tangent_markers > s.technical_terms


def _is_efficient(s: BehaviorSignals) -> bool:
    return (
        0 < s.words < settings.EFFICIENT_WORD_COUNT
        and s.tangent_markers == 0
        and s.technical_density >= settings.EFFICIENT_TECH_DENSITY
    )


# Evaluated top to bottom; the first matching row wins.
BEHAVIOR_RULES: List[BehaviorRule] = [
    BehaviorRule("edge-case", _is_edge_case),
    BehaviorRule("confused", _is_confused),
    BehaviorRule("chatty", _is_chatty),
    BehaviorRule("efficient", _is_efficient),
    BehaviorRule("standard", lambda _s: True),
]


def classify_signals(signals: BehaviorSignals) -> BehaviorType:
    for rule in BEHAVIOR_RULES:
        if rule.matches(signals):
            return rule.behavior
    return "standard"


def classify_behavior(text: Optional[str]) -> BehaviorType:
    """Label the latest response with a single behavior type."""

    return classify_signals(extract_signals(text))


_KEYWORD = re.compile(r"[a-z0-9]+")
STOP_WORDS = frozenset(
    """
    about after also been being could does have into just like more most other over some such
    than that their them then there these they this those very were what when where which while
    with would your describe explain tell time
    """.split()
)


def keywords(text: Optional[str]) -> List[str]:
    """Content words longer than three letters, stop words removed."""

    return [
        word
        for word in _KEYWORD.findall((text or "").lower())
        if len(word) > 3 and word not in STOP_WORDS
    ]


def keyword_overlap(response_text: Optional[str], question_text: Optional[str]) -> float:
    """Share of the question's keywords echoed (or partially echoed) by the answer."""

    wanted = set(keywords(question_text))
    if not wanted:
        return 1.0
    said = set(keywords(response_text))
    echoed = sum(1 for kw in wanted if any(kw in word or word in kw for word in said))
    return echoed / len(wanted)


def is_off_topic(text: Optional[str], question_text: Optional[str]) -> bool:
    """Long answers with no technical vocabulary that barely touch the question."""

    signals = extract_signals(text)
    if signals.words < settings.OFF_TOPIC_MIN_WORDS or signals.technical_terms:
        return False
    return keyword_overlap(signals.text, question_text) < settings.OFF_TOPIC_THRESHOLD


__all__ = [
    "BEHAVIOR_RULES",
    "BehaviorRule",
    "BehaviorSignals",
    "classify_behavior",
    "classify_signals",
    "extract_signals",
    "is_off_topic",
    "keyword_overlap",
    "keywords",
]
