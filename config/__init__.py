"""Configuration package for the interview engine."""
from .markers import MarkerEngine, MarkerFinding, count_markers, marker_engine, match_markers
from .settings import Settings, settings

__all__ = [
    "MarkerEngine",
    "MarkerFinding",
    "count_markers",
    "marker_engine",
    "match_markers",
    "Settings",
    "settings",
]
