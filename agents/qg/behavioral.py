"""Behavioral question templates."""
from __future__ import annotations

from typing import List

from agents.types import JobRole

from .common import QuestionTemplate

STAR = ["situation", "action", "result"]

COMMON_TEMPLATES: List[QuestionTemplate] = [
    QuestionTemplate(
        text="Tell me about a time when you had to work with a difficult team member. How did you handle it?",
        category="Collaboration",
        type="behavioral",
        expected_elements=STAR + ["conflict"],
    ),
    QuestionTemplate(
        text="Describe a situation where you had to learn a new technology or skill quickly. What was your approach?",
        category="Learning Agility",
        type="behavioral",
        difficulty_offset=-1,
        expected_elements=["learn", "resources", "applied", "outcome"],
    ),
    QuestionTemplate(
        text="Give me an example of a time when you had to make a difficult decision with incomplete information.",
        category="Decision Making",
        type="behavioral",
        difficulty_offset=1,
        expected_elements=["decision", "risk", "information", "outcome"],
    ),
    QuestionTemplate(
        text="Tell me about a time when priorities changed suddenly. How did you adapt?",
        category="Adaptability",
        type="behavioral",
        expected_elements=STAR + ["priorit"],
    ),
]


def competency_templates(role: JobRole) -> List[QuestionTemplate]:
    """One prompt per behavioral competency not already covered by the common set."""

    covered = {template.category.lower() for template in COMMON_TEMPLATES}
    templates: List[QuestionTemplate] = []
    for competency in role.behavioral_competencies:
        if competency.lower() in covered:
            continue
        templates.append(
            QuestionTemplate(
                text=(
                    f"Describe a situation where you demonstrated strong {competency.lower()} skills. "
                    "What was the outcome?"
                ),
                category=competency,
                type="behavioral",
                expected_elements=list(STAR),
            )
        )
    return templates


def behavioral_templates(role: JobRole) -> List[QuestionTemplate]:
    return list(COMMON_TEMPLATES) + competency_templates(role)


__all__ = ["COMMON_TEMPLATES", "behavioral_templates", "competency_templates"]
