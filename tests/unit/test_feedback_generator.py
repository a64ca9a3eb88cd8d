from __future__ import annotations

from agents.feedback_generator import (
    articulation_score,
    behavior_shares,
    category_averages,
    generate_feedback,
    professionalism_score,
    structure_score,
)
from agents.types import CandidateResponse, InterviewQuestion, ResponseEvaluation, Session
from resume_analysis import minimal_analysis
from services.role_catalog import catalog


def _session(rows, behaviors=None) -> Session:
    role = catalog.role_by_id("backend-engineer")
    session = Session(id="s-1", role=role, experience_level=catalog.level("mid"))
    for index, (qtype, category, text, scores, reason) in enumerate(rows):
        question = InterviewQuestion(
            id=f"q-{index}", type=qtype, text="Question?", category=category, difficulty=5
        )
        session.questions.append(question)
        session.record_response(CandidateResponse(question_id=question.id, text=text))
        depth, clarity, completeness = scores
        session.record_evaluation(
            ResponseEvaluation(
                question_id=question.id,
                depth_score=depth,
                clarity_score=clarity,
                completeness_score=completeness,
                needs_follow_up=reason is not None,
                follow_up_reason=reason,
                technical_accuracy=8.0 if qtype == "technical" else None,
            )
        )
    session.behavior_history = list(behaviors or ["standard"] * len(rows))
    return session


STRONG_TEXT = (
    "First, I designed the API with versioning because clients upgrade slowly. "
    "Then I implemented rate limits on each endpoint. Finally, I measured latency and reduced it."
)


def test_per_response_signals():
    assert structure_score(STRONG_TEXT) > structure_score("it was fine")
    assert articulation_score("") == 0.0
    assert articulation_score(STRONG_TEXT) > articulation_score("um basically you know basically um")
    assert professionalism_score("yeah dude gonna do it lol") < professionalism_score(STRONG_TEXT)


def test_report_for_strong_session():
    session = _session(
        [
            ("technical", "API Development", STRONG_TEXT, (9, 9, 9), None),
            ("technical", "Databases", STRONG_TEXT, (8, 9, 8), None),
            ("behavioral", "Collaboration", STRONG_TEXT, (8, 8, 8), None),
        ]
    )
    report = generate_feedback(session)
    assert 0 <= report.overall_score <= 100
    assert report.technical.total > 0 and report.communication.total > 0
    assert any(strength.startswith("API Development") for strength in report.strengths)
    assert report.question_breakdown[0].feedback == "Strong response."
    assert report.resume_alignment is None
    assert not report.ended_early


def test_improvements_are_sorted_and_prioritized():
    session = _session(
        [
            ("technical", "API Development", "ok", (1, 2, 1), "too_short"),
            ("technical", "Databases", "it depends", (5, 6, 5), "incomplete"),
            ("behavioral", "Collaboration", STRONG_TEXT, (9, 9, 9), None),
        ]
    )
    report = generate_feedback(session, ended_early=True)
    categories = [item.category for item in report.improvements]
    assert categories.index("API Development") < categories.index("Databases")
    api = report.improvements[categories.index("API Development")]
    assert api.priority == "high"
    assert "Response Completeness" in categories
    assert report.question_breakdown[0].feedback == "Response needs improvement. The answer was too brief to assess."
    assert report.summary.endswith("Partial report based on 3 answered question(s).")


def test_behavior_penalties_lower_communication():
    rows = [("behavioral", "Collaboration", STRONG_TEXT, (8, 8, 8), None)]
    calm = generate_feedback(_session(rows, ["standard"]))
    noisy = generate_feedback(_session(rows, ["edge-case"]))
    assert noisy.communication.professionalism < calm.communication.professionalism
    assert behavior_shares(_session(rows, ["edge-case"])) == {"edge-case": 1.0}


def test_behavioral_only_session_has_zero_technical():
    session = _session([("behavioral", "Collaboration", STRONG_TEXT, (8, 8, 8), None)])
    report = generate_feedback(session)
    assert report.technical.total == 0
    assert report.technical.grade == "F"
    assert category_averages(session) == {"Collaboration": 8.0}


def test_resume_alignment_section():
    session = _session([("technical", "Databases", STRONG_TEXT, (7, 7, 7), None)])
    session.resume_analysis = minimal_analysis(session.role)
    report = generate_feedback(session)
    alignment = report.resume_alignment
    assert alignment.alignment_score == 0
    assert alignment.missing_skills == session.role.technical_skills
    assert len(alignment.suggestions) == 4
