from __future__ import annotations  # Re-export resume_analysis public API

from .resume_analysis import (  # noqa: F401 F403
    DEGRADED_SUMMARY,
    ResumeParsingError,
    analyze_resume,
    calculate_alignment,
    extract_skills,
    minimal_analysis,
    split_sections,
)

__all__ = [
    "DEGRADED_SUMMARY",
    "ResumeParsingError",
    "analyze_resume",
    "calculate_alignment",
    "extract_skills",
    "minimal_analysis",
    "split_sections",
]
