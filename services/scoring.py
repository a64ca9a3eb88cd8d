"""Scoring aggregation helpers and grade bands."""
from __future__ import annotations

from statistics import mean as _mean
from typing import Dict, Iterable, Optional

from agents.types import Grade, Priority
from config.settings import settings


def _round1(value: float) -> float:
    """Round a float to one decimal place with stable formatting."""
    return float(f"{value:.1f}")


def clamp(value: float, low: float = 0.0, high: float = 10.0) -> float:
    return _round1(max(low, min(high, value)))


def average(values: Iterable[float]) -> float:
    items = list(values)
    if not items:
        return 0.0
    return _round1(_mean(items))


def grade_for(percent: float, bands: Optional[Dict[str, float]] = None) -> Grade:
    """Letter grade for ``percent`` (0-100); bands are checked highest first."""

    table = bands if bands is not None else settings.GRADE_BANDS
    for letter, floor in sorted(table.items(), key=lambda item: item[1], reverse=True):
        if percent >= floor:
            return letter  # type: ignore[return-value]
    return "F"


def total_of(*scores: float) -> float:
    """Sum four 0-10 sub-scores into a 0-40 total."""

    return clamp(sum(scores), 0.0, 40.0)


def percent_of_40(total: float) -> float:
    return _round1(total / 40.0 * 100.0)


def overall_score(communication_total: float, technical_total: float) -> float:
    """Weighted combination of the two 40-point totals on a 100-point scale."""

    comm_weight = settings.COMMUNICATION_WEIGHT
    tech_weight = settings.TECHNICAL_WEIGHT
    denominator = (comm_weight + tech_weight) or 1.0
    combined = (
        percent_of_40(communication_total) * comm_weight + percent_of_40(technical_total) * tech_weight
    ) / denominator
    return clamp(combined, 0.0, 100.0)


def priority_for(score: float, threshold: Optional[float] = None) -> Priority:
    """Improvement priority by distance below the strength threshold."""

    gap = (threshold if threshold is not None else settings.STRENGTH_THRESHOLD) - score
    if gap >= 3.0:
        return "high"
    if gap >= 1.5:
        return "medium"
    return "low"


__all__ = [
    "average",
    "clamp",
    "grade_for",
    "overall_score",
    "percent_of_40",
    "priority_for",
    "total_of",
]
