"""Shared utilities for question generators."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from agents.types import ExperienceLevel, InterviewQuestion, QuestionType, ResumeReference
from config.settings import settings


@dataclass(frozen=True)
class QuestionTemplate:
    """Static question blueprint before it is bound to a level."""

    text: str
    category: str
    type: QuestionType
    difficulty_offset: int = 0
    expected_elements: List[str] = field(default_factory=list)


def new_question_id() -> str:
    return f"q-{uuid.uuid4().hex[:12]}"


def clamp_difficulty(value: float) -> int:
    return int(max(1, min(10, round(value))))


def make_question(
    template: QuestionTemplate,
    level: ExperienceLevel,
    resume_context: Optional[ResumeReference] = None,
) -> InterviewQuestion:
    """Bind ``template`` to ``level`` and assign a fresh id."""

    return InterviewQuestion(
        id=new_question_id(),
        type=template.type,
        text=template.text.strip(),
        category=template.category,
        difficulty=clamp_difficulty(level.expected_depth + template.difficulty_offset),
        resume_context=resume_context,
        expected_elements=list(template.expected_elements),
    )


def should_follow_up(parent: InterviewQuestion) -> bool:
    """Return True while ``parent`` may still spawn another follow-up."""

    return parent.follow_up_count < settings.MAX_FOLLOW_UPS


__all__ = [
    "QuestionTemplate",
    "clamp_difficulty",
    "make_question",
    "new_question_id",
    "should_follow_up",
]
