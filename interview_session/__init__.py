from __future__ import annotations  # Re-export interview_session public API

from .interview_session import CONTINUATION_MESSAGE, InterviewController  # noqa: F401
from .rendering import RENDERERS, Renderer, renderer_for  # noqa: F401
from .text_mode import format_action, format_progress, format_question, format_report  # noqa: F401

__all__ = [
    "CONTINUATION_MESSAGE",
    "InterviewController",
    "RENDERERS",
    "Renderer",
    "format_action",
    "format_progress",
    "format_question",
    "format_report",
    "renderer_for",
]
