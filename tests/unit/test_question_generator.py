from __future__ import annotations

import random
from collections import Counter

import pytest

from agents.qg.common import QuestionTemplate, clamp_difficulty, make_question
from agents.qg.followup import generate_follow_up
from agents.qg.generator import QuestionGenerator
from agents.types import InterviewQuestion, ResponseEvaluation, ResumeDocument
from resume_analysis import analyze_resume
from services.role_catalog import catalog


def _evaluation(reason="insufficient_depth") -> ResponseEvaluation:
    return ResponseEvaluation(
        question_id="q-parent",
        depth_score=2,
        clarity_score=3,
        completeness_score=2,
        needs_follow_up=True,
        follow_up_reason=reason,
    )


def _parent(qtype="technical") -> InterviewQuestion:
    return InterviewQuestion(
        id="q-parent",
        type=qtype,
        text="How do you release services safely?",
        category="CI/CD",
        difficulty=6,
        expected_elements=["rollback", "monitoring"],
    )


@pytest.mark.parametrize("level,expected", [("entry", 6), ("mid", 8), ("senior", 9), ("lead", 10)])
def test_question_count_by_level(generator, level, expected):
    role = catalog.role_by_id("software-engineer")
    questions = generator.generate_question_set(role, catalog.level(level))
    assert generator.question_count(catalog.level(level)) == expected
    assert len(questions) == expected


@pytest.mark.parametrize("role_id", catalog.role_ids())
def test_question_set_shape(role_id):
    generator = QuestionGenerator(random.Random(3))
    role = catalog.role_by_id(role_id)
    questions = generator.generate_question_set(role, catalog.level("mid"))
    ids = [question.id for question in questions]
    assert len(ids) == len(set(ids))
    types = Counter(question.type for question in questions)
    assert types["technical"] >= 1 and types["behavioral"] >= 1
    assert all(question.parent_question_id is None for question in questions)
    assert all(1 <= question.difficulty <= 10 for question in questions)

    categories = Counter(question.category for question in questions)
    if max(categories.values()) * 2 <= len(questions):
        for first, second in zip(questions, questions[1:]):
            assert first.category != second.category


def test_technical_ratio_is_bounded():
    generator = QuestionGenerator(random.Random(1))
    for role in catalog.roles():
        for _ in range(20):
            assert 0.4 <= generator.technical_ratio(role) <= 0.7


def test_resume_questions_reference_skills(generator):
    role = catalog.role_by_id("software-engineer")
    analysis = analyze_resume(
        ResumeDocument(content="Skills: Python, React, AWS\nExperience:\n- Built a payments API at Acme"),
        role,
    )
    questions = generator.generate_question_set(role, catalog.level("mid"), analysis)
    assert len(questions) == 8
    anchored = [q for q in questions if q.type == "technical" and q.resume_context is not None]
    assert len(anchored) == 2
    assert {q.resume_context.content for q in anchored} == {"Python", "React"}
    assert all(q.text.startswith("I see you have experience with") for q in anchored)
    behavioral = [q for q in questions if q.type == "behavioral" and q.resume_context is not None]
    assert len(behavioral) == 1
    assert behavioral[0].resume_context.section == "experience"


def test_drill_category_comes_first(generator):
    role = catalog.role_by_id("software-engineer")
    questions = generator.generate_question_set(role, catalog.level("mid"), drill_category="System Design")
    assert questions[0].category == "System Design"
    assert Counter(q.category for q in questions)["System Design"] >= 2


def test_make_question_binds_difficulty():
    template = QuestionTemplate(text="  Explain caching.  ", category="System Design", type="technical", difficulty_offset=3)
    question = make_question(template, catalog.level("senior"))
    assert question.text == "Explain caching."
    assert question.difficulty == 10
    assert question.id.startswith("q-")
    assert clamp_difficulty(-4) == 1


def test_follow_up_links_to_parent_and_lowers_difficulty():
    parent = _parent()
    follow_up = generate_follow_up(parent, _evaluation(), "We just used Docker for it.")
    assert follow_up is not None
    assert follow_up.parent_question_id == parent.id
    assert follow_up.is_follow_up
    assert follow_up.difficulty == 5
    assert follow_up.category == parent.category
    assert follow_up.text.startswith("You mentioned docker")
    assert parent.follow_up_count == 1


def test_follow_up_targets_missing_element():
    follow_up = generate_follow_up(_parent("behavioral"), _evaluation("incomplete"), "We had monitoring in place.")
    assert "rollback" in follow_up.text
    assert follow_up.expected_elements == ["rollback"]


def test_follow_up_cap_and_nesting():
    parent = _parent()
    first = generate_follow_up(parent, _evaluation("too_short"), "ok")
    second = generate_follow_up(parent, _evaluation("too_short"), "ok")
    assert first is not None and second is not None
    assert generate_follow_up(parent, _evaluation("too_short"), "ok") is None
    assert parent.follow_up_count == 2
    with pytest.raises(ValueError):
        generate_follow_up(first, _evaluation(), "ok")
