"""Follow-up question generation for low-quality answers."""
from __future__ import annotations

from typing import Dict, List, Optional

from agents.response_evaluator import mentioned_terms
from agents.types import FollowUpReason, InterviewQuestion, ResponseEvaluation
from config.markers import marker_engine

from .common import new_question_id, should_follow_up

REASON_PROMPTS: Dict[FollowUpReason, str] = {
    "no_response": (
        "Let's try a narrower angle on {topic}: can you share one concrete example from your own work?"
    ),
    "too_short": "Could you expand on that with one specific example related to {topic}?",
    "insufficient_depth": (
        "Can you go one level deeper on {topic}? What exactly did you do, and why did you choose that approach?"
    ),
    "unclear": (
        "Could you restate that step by step? Start with the context, then what you did, then the result."
    ),
    "incomplete": "You haven't covered {missing} yet. How does it factor into your answer?",
}


def _missing_elements(parent: InterviewQuestion, response_text: str) -> List[str]:
    lowered = (response_text or "").lower()
    return [element for element in parent.expected_elements if element.lower() not in lowered]


def _mentioned_technology(parent: InterviewQuestion, response_text: str) -> Optional[str]:
    terms = set(marker_engine().terms("technical"))
    found = mentioned_terms(response_text, terms) - mentioned_terms(parent.text, terms)
    return sorted(found, key=len, reverse=True)[0] if found else None


def generate_follow_up(
    parent: InterviewQuestion,
    evaluation: ResponseEvaluation,
    response_text: str = "",
) -> Optional[InterviewQuestion]:
    """Return a narrower question linked to ``parent`` or ``None`` once its cap is reached.

    Increments ``parent.follow_up_count`` when a question is produced.
    """

    if parent.parent_question_id is not None:
        raise ValueError("follow-ups attach to primary questions only")
    if not should_follow_up(parent):
        return None

    reason: FollowUpReason = evaluation.follow_up_reason or "insufficient_depth"
    topic = parent.category.lower()
    missing = _missing_elements(parent, response_text)
    expected: List[str] = []

    technology = _mentioned_technology(parent, response_text) if parent.type == "technical" else None
    if technology and reason in ("insufficient_depth", "incomplete"):
        text = (
            f"You mentioned {technology}. Can you walk me through one specific decision you made with "
            f"{technology} and what it changed?"
        )
        expected = [technology, "decision"]
    elif reason == "incomplete" and missing:
        text = REASON_PROMPTS["incomplete"].format(missing=missing[0])
        expected = [missing[0]]
    else:
        text = REASON_PROMPTS[reason].format(topic=topic, missing=missing[0] if missing else topic)
        expected = missing[:2]

    parent.follow_up_count += 1
    return InterviewQuestion(
        id=new_question_id(),
        type=parent.type,
        text=text,
        category=parent.category,
        difficulty=max(1, parent.difficulty - 1),
        resume_context=parent.resume_context,
        expected_elements=expected,
        parent_question_id=parent.id,
    )


__all__ = ["REASON_PROMPTS", "generate_follow_up"]
