"""Pick the text or voice renderer for a session's interaction mode."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from agents.types import FeedbackReport, InteractionMode, InterviewAction, InterviewQuestion, Progress

from . import text_mode, voice_mode


@dataclass(frozen=True)
class Renderer:
    mode: InteractionMode
    question: Callable[[InterviewQuestion, Optional[int]], str]
    action: Callable[[InterviewAction, Optional[int]], str]
    progress: Callable[[Progress], str]
    report: Callable[[FeedbackReport], str]


RENDERERS: Dict[str, Renderer] = {
    module_mode: Renderer(
        mode=module_mode,
        question=module.format_question,
        action=module.format_action,
        progress=module.format_progress,
        report=module.format_report,
    )
    for module_mode, module in (("text", text_mode), ("voice", voice_mode))
}


def renderer_for(mode: Optional[str]) -> Renderer:
    """Renderer for ``mode``; unknown or missing modes fall back to text."""

    return RENDERERS.get(mode or "text", RENDERERS["text"])


__all__ = ["RENDERERS", "Renderer", "renderer_for"]
