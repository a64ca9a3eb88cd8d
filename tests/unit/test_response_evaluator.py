from __future__ import annotations

from agents.response_evaluator import (
    EvaluationSignals,
    decide_follow_up,
    evaluate_response,
    mentioned_terms,
    role_terms,
    score_clarity,
    score_depth,
    word_count,
)
from agents.types import CandidateResponse, InterviewQuestion
from services.role_catalog import catalog


def _question(qtype: str = "behavioral", expected=None) -> InterviewQuestion:
    return InterviewQuestion(
        id="q-1",
        type=qtype,
        text="Tell me about a project you delivered with a team.",
        category="Behavioral" if qtype == "behavioral" else "System Design",
        difficulty=5,
        expected_elements=expected if expected is not None else ["situation", "action", "result"],
    )


def _response(text: str) -> CandidateResponse:
    return CandidateResponse(question_id="q-1", text=text, word_count=word_count(text))


def test_empty_response_gets_minimum_scores():
    evaluation = evaluate_response(_question(), _response(""))
    assert evaluation.depth_score == 0
    assert evaluation.clarity_score == 0
    assert evaluation.completeness_score == 0
    assert evaluation.needs_follow_up
    assert evaluation.follow_up_reason == "no_response"


def test_very_short_response_is_too_short():
    evaluation = evaluate_response(_question(), _response("Yes, I did."))
    assert evaluation.needs_follow_up
    assert evaluation.follow_up_reason == "too_short"


def test_brief_answer_needs_follow_up():
    evaluation = evaluate_response(_question(), _response("I worked on a team project."))
    assert evaluation.needs_follow_up
    assert evaluation.follow_up_reason in ("insufficient_depth", "unclear", "incomplete")
    assert evaluation.depth_score < 5 and evaluation.clarity_score < 5


def test_strong_answer_passes(strong_answer):
    evaluation = evaluate_response(_question(), _response(strong_answer))
    assert evaluation.depth_score >= 5
    assert evaluation.clarity_score >= 5
    assert not evaluation.needs_follow_up
    assert evaluation.follow_up_reason is None
    assert evaluation.technical_accuracy is None


def test_scores_stay_in_range(strong_answer):
    for text in ("", "ok", strong_answer, strong_answer * 4, "um uh basically " * 30):
        evaluation = evaluate_response(_question("technical"), _response(text), catalog.role_by_id("backend-engineer"))
        for score in (evaluation.depth_score, evaluation.clarity_score, evaluation.completeness_score):
            assert 0 <= score <= 10
        assert evaluation.technical_accuracy is not None
        assert 0 <= evaluation.technical_accuracy <= 10


def test_completeness_uses_expected_elements():
    question = _question(expected=["cache", "database"])
    text = "We placed a cache in front of the database because reads dominated the traffic pattern."
    assert evaluate_response(question, _response(text)).completeness_score == 10.0
    partial = "We placed a cache in front of the service because reads dominated the traffic pattern."
    assert evaluate_response(question, _response(partial)).completeness_score == 5.0


def test_depth_and_clarity_reward_reasoning():
    flat = "I did the work and it was fine and we shipped it to users in the end"
    reasoned = "First I profiled the service because latency was high, therefore we added a cache."
    assert score_depth(reasoned) > score_depth(flat)
    assert score_clarity(reasoned) > score_clarity(flat)


def test_role_terms_split_compound_skills():
    terms = role_terms(catalog.role_by_id("product-manager"))
    assert "metrics & kpis" in terms
    assert "kpis" in terms and "metrics" in terms
    assert mentioned_terms("We tracked KPIs weekly", terms) >= {"kpis"}


def test_follow_up_decision_table():
    assert decide_follow_up(EvaluationSignals(words=0, depth=0, clarity=0, completeness=0)) == (True, "no_response")
    assert decide_follow_up(EvaluationSignals(words=3, depth=9, clarity=9, completeness=9)) == (True, "too_short")
    assert decide_follow_up(EvaluationSignals(words=40, depth=2, clarity=8, completeness=3)) == (
        True,
        "insufficient_depth",
    )
    assert decide_follow_up(EvaluationSignals(words=40, depth=8, clarity=4, completeness=1)) == (True, "incomplete")
    assert decide_follow_up(EvaluationSignals(words=40, depth=4, clarity=8, completeness=9)) == (False, None)
