"""Resume-aware question builders."""
from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

from agents.types import JobRole, ResumeAnalysis, ResumeReference, ResumeSkill
from config.markers import marker_engine

from .common import QuestionTemplate

# Resume skill category -> preferred role categories, best first.
SKILL_CATEGORY_HINTS: Dict[str, List[str]] = {
    "programming languages": ["Coding", "JavaScript", "Machine Learning", "API Development", "Infrastructure"],
    "frameworks": ["UI Development", "JavaScript", "API Development", "Coding"],
    "databases": ["Databases", "System Design", "Coding", "Statistics"],
    "cloud": ["Infrastructure", "System Design", "CI/CD"],
    "devops": ["CI/CD", "Infrastructure", "Monitoring", "System Design"],
    "data science": ["Machine Learning", "Statistics", "Analytics"],
    "tools": ["CI/CD", "Coding", "Product Strategy"],
    "product": ["Product Strategy", "Analytics"],
}

EVIDENCE_MAX_CHARS = 90


def _technical_categories(role: JobRole) -> List[str]:
    ranked = sorted(
        (category for category in role.question_categories if category.technical_focus),
        key=lambda category: category.weight,
        reverse=True,
    )
    return [category.name for category in ranked]


def category_for_skill(role: JobRole, skill: ResumeSkill) -> Tuple[str, bool]:
    """Return ``(category, matched)`` placing ``skill`` in one of the role's categories."""

    available = _technical_categories(role)
    if not available:
        return "Technical", False
    lowered = skill.name.lower()
    engine = marker_engine()
    for name in available:
        if lowered in engine.category_keywords(name):
            return name, True
    for name in SKILL_CATEGORY_HINTS.get(skill.category.lower(), []):
        if name in available:
            return name, True
    return available[0], False


def matched_categories(role: JobRole, analysis: Optional[ResumeAnalysis]) -> Set[str]:
    if analysis is None:
        return set()
    matched: Set[str] = set()
    for skill in analysis.technical_skills:
        category, is_match = category_for_skill(role, skill)
        if is_match:
            matched.add(category)
    return matched


def resume_technical_templates(
    role: JobRole, analysis: ResumeAnalysis, limit: int
) -> List[Tuple[QuestionTemplate, ResumeReference]]:
    """Skill-anchored technical prompts, role-relevant skills first."""

    ranked: List[Tuple[float, int, ResumeSkill, str]] = []
    for index, skill in enumerate(analysis.technical_skills):
        category, is_match = category_for_skill(role, skill)
        relevance = 1.0 if is_match else 0.6
        ranked.append((relevance, index, skill, category))
    ranked.sort(key=lambda entry: (-entry[0], entry[1]))

    results: List[Tuple[QuestionTemplate, ResumeReference]] = []
    for relevance, _index, skill, category in ranked[: max(0, limit)]:
        template = QuestionTemplate(
            text=(
                f"I see you have experience with {skill.name}. Can you describe a challenging problem "
                f"you solved using {skill.name} and your approach?"
            ),
            category=category,
            type="technical",
            expected_elements=[skill.name.lower(), "problem", "approach"],
        )
        results.append((template, ResumeReference(section="skills", content=skill.name, relevance=relevance)))
    return results


def _shorten(text: str) -> str:
    text = " ".join(text.split())
    if len(text) <= EVIDENCE_MAX_CHARS:
        return text.rstrip(".")
    return text[:EVIDENCE_MAX_CHARS].rsplit(" ", 1)[0].rstrip(",.;:") + "..."


def resume_behavioral_template(analysis: ResumeAnalysis) -> Optional[Tuple[QuestionTemplate, ResumeReference]]:
    """Behavioral prompt anchored on a project, role or achievement from the resume."""

    sources = (
        ("projects", analysis.projects),
        ("experience", analysis.experience),
        ("achievements", analysis.achievements),
    )
    for section, entries in sources:
        for entry in entries:
            if not entry.strip():
                continue
            evidence = _shorten(entry)
            template = QuestionTemplate(
                text=(
                    f'Your resume mentions "{evidence}". What was your role there, and how did you '
                    "work with others to deliver it?"
                ),
                category="Collaboration",
                type="behavioral",
                expected_elements=["role", "team", "result"],
            )
            return template, ResumeReference(section=section, content=evidence, relevance=0.8)
    return None


__all__ = [
    "SKILL_CATEGORY_HINTS",
    "category_for_skill",
    "matched_categories",
    "resume_behavioral_template",
    "resume_technical_templates",
]
