"""Per-turn policy helpers for follow-ups and redirects."""
from __future__ import annotations

from typing import Optional

from agents.types import BehaviorType, InterviewQuestion
from config.settings import settings


def remaining_follow_ups(parent: InterviewQuestion, cap: Optional[int] = None) -> int:
    """Return how many more follow-ups ``parent`` may spawn."""

    limit = settings.MAX_FOLLOW_UPS if cap is None else cap
    return max(0, limit - parent.follow_up_count)


def next_edge_case_streak(streak: int, behavior: BehaviorType) -> int:
    """Consecutive edge-case answers; any other behavior resets the count."""

    return streak + 1 if behavior == "edge-case" else 0


def should_redirect(edge_case_streak: int, tolerance: Optional[int] = None) -> bool:
    """After ``tolerance`` edge-case answers in a row the controller stops advancing."""

    limit = settings.EDGE_CASE_TOLERANCE if tolerance is None else tolerance
    return edge_case_streak >= limit


__all__ = ["next_edge_case_streak", "remaining_follow_ups", "should_redirect"]
