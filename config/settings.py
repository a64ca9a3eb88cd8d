"""Application settings and configuration management."""
from __future__ import annotations

from typing import Dict

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    # Response evaluation
    FOLLOW_UP_THRESHOLD: float = 5.0
    FOLLOW_UP_MIN_WORDS: int = 5
    DEPTH_SATURATION_WORDS: int = 150
    CLARITY_MIN_WORDS: int = 10
    RUN_ON_SENTENCE_WORDS: int = 40

    # Behavior classification
    CHATTY_WORD_COUNT: int = 150
    CHATTY_TANGENT_MARKERS: int = 2
    EFFICIENT_WORD_COUNT: int = 30
    EFFICIENT_TECH_DENSITY: float = 0.15
    EDGE_CASE_TOLERANCE: int = 3
    OFF_TOPIC_THRESHOLD: float = 0.3
    OFF_TOPIC_MIN_WORDS: int = 60

    # Question generation
    MIN_QUESTIONS: int = 5
    MAX_QUESTIONS: int = 10
    TECHNICAL_RATIO_MIN: float = 0.4
    TECHNICAL_RATIO_MAX: float = 0.7
    TECHNICAL_RATIO_JITTER: float = 0.1
    MAX_FOLLOW_UPS: int = 2
    RESUME_QUESTIONS_MAX: int = 2

    # Feedback
    COMMUNICATION_WEIGHT: float = 0.5
    TECHNICAL_WEIGHT: float = 0.5
    GRADE_BANDS: Dict[str, float] = Field(
        default_factory=lambda: {"A": 90.0, "B": 80.0, "C": 70.0, "D": 60.0}
    )
    STRENGTH_THRESHOLD: float = 7.0

    # Pacing
    AVERAGE_QUESTION_SECONDS: int = 180

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True)


settings = Settings()
