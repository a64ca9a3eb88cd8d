from __future__ import annotations

import pytest

from agents.types import ResumeDocument
from resume_analysis import (
    DEGRADED_SUMMARY,
    ResumeParsingError,
    analyze_resume,
    calculate_alignment,
    extract_skills,
    minimal_analysis,
    split_sections,
)
from services.errors import ResumeAnalysisError
from services.role_catalog import catalog

RESUME = """Jane Doe
Summary
Backend developer focused on reliable services.

Skills:
Python, PostgreSQL, Docker, Git

Experience
- Senior Engineer at Acme: built REST APIs serving 2M requests a day
- Engineer at Beta: cut deployment time by 40% with CI/CD

Projects
- Open-source rate limiter written in Go (golang)
"""


def test_split_sections_groups_bullets():
    sections = split_sections(RESUME)
    assert sections["experience"][0].startswith("Senior Engineer at Acme")
    assert len(sections["experience"]) == 2
    assert sections["projects"] == ["Open-source rate limiter written in Go (golang)"]
    assert "Python, PostgreSQL, Docker, Git" in sections["skills"]


def test_extract_skills_in_text_order():
    names = [skill.name for skill in extract_skills(RESUME)]
    assert names[:4] == ["Python", "PostgreSQL", "Docker", "Git"]
    assert "CI/CD" in names and "Go" in names
    categories = {skill.name: skill.category for skill in extract_skills(RESUME)}
    assert categories["Docker"] == "Cloud"


def test_analyze_resume_for_backend_role():
    role = catalog.role_by_id("backend-engineer")
    analysis = analyze_resume(ResumeDocument(content=RESUME), role)
    assert analysis.experience and analysis.projects
    assert analysis.achievements == ["Engineer at Beta: cut deployment time by 40% with CI/CD"]
    assert set(analysis.matched_skills) | set(analysis.missing_skills) == set(role.technical_skills)
    assert 0 <= analysis.alignment_score.overall <= 100
    assert analysis.alignment_score.cultural == 70.0
    assert analysis.summary.startswith("Overall alignment score:")


def test_alignment_formula():
    role = catalog.role_by_id("software-engineer")
    matched = role.technical_skills[:4]
    alignment = calculate_alignment(role, matched, ["a", "b"])
    assert alignment.technical == 50.0
    assert alignment.experience == 50.0
    assert alignment.overall == 54.0


@pytest.mark.parametrize(
    "document",
    [ResumeDocument(content="Python", format="pdf"), ResumeDocument(content="   \n ")],
)
def test_unreadable_documents_raise(document):
    with pytest.raises(ResumeParsingError):
        analyze_resume(document, catalog.role_by_id("software-engineer"))
    assert issubclass(ResumeParsingError, ResumeAnalysisError)


def test_minimal_analysis():
    role = catalog.role_by_id("data-scientist")
    analysis = minimal_analysis(role)
    assert analysis.summary == DEGRADED_SUMMARY
    assert analysis.alignment_score.overall == 0
    assert analysis.missing_skills == role.technical_skills
    assert analysis.technical_skills == []
