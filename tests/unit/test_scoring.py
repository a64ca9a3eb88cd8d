import pytest

import services.scoring as scoring

GRADE_RANK = {"A": 4, "B": 3, "C": 2, "D": 1, "F": 0}


@pytest.mark.parametrize(
    "percent,grade",
    [(100, "A"), (90, "A"), (89.9, "B"), (80, "B"), (70, "C"), (60, "D"), (59.9, "F"), (0, "F")],
)
def test_grade_bands(percent, grade):
    assert scoring.grade_for(percent) == grade


def test_grade_is_monotonic():
    ranks = [GRADE_RANK[scoring.grade_for(float(p))] for p in range(0, 101)]
    assert ranks == sorted(ranks)


def test_custom_bands():
    assert scoring.grade_for(55, {"A": 50}) == "A"
    assert scoring.grade_for(45, {"A": 50}) == "F"


def test_totals_and_overall_are_bounded():
    assert scoring.total_of(10, 10, 10, 10) == 40
    assert scoring.total_of(12, 12, 12, 12) == 40
    assert scoring.percent_of_40(20) == 50.0
    assert scoring.overall_score(40, 40) == 100.0
    assert scoring.overall_score(0, 0) == 0.0
    assert scoring.overall_score(40, 0) == 50.0


def test_overall_respects_weights(monkeypatch):
    monkeypatch.setattr(scoring.settings, "COMMUNICATION_WEIGHT", 0.25)
    monkeypatch.setattr(scoring.settings, "TECHNICAL_WEIGHT", 0.75)
    assert scoring.overall_score(40, 0) == 25.0


def test_average_and_clamp():
    assert scoring.average([]) == 0.0
    assert scoring.average([7, 8]) == 7.5
    assert scoring.clamp(11.26) == 10.0
    assert scoring.clamp(-1) == 0.0


def test_priority_by_gap():
    assert scoring.priority_for(3.0) == "high"
    assert scoring.priority_for(5.0) == "medium"
    assert scoring.priority_for(6.5) == "low"
