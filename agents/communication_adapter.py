"""Tone adaptation for interviewer messages based on candidate behavior."""
from __future__ import annotations

import re
from typing import Dict, List, Optional

from agents.types import AdaptedResponse, BehaviorType

ACKNOWLEDGMENTS: Dict[BehaviorType, str] = {
    "confused": "No problem, let me help.",
    "efficient": "Got it.",
    "chatty": "Thanks for sharing all of that.",
    "edge-case": "Noted.",
    "standard": "Thank you for your response.",
}

TRANSITIONS: Dict[BehaviorType, str] = {
    "confused": "Let's take this one step at a time.",
    "efficient": "Next:",
    "chatty": "Let's keep the next answer focused on the key points.",
    "edge-case": "Let's continue with the interview.",
    "standard": "Let's move on.",
}

TEMPLATES: Dict[BehaviorType, str] = {
    "confused": "Let me help clarify: {core} Take your time, and feel free to ask me to rephrase anything.",
    "efficient": "{core}",
    "chatty": "Thank you for the detailed response. Let's focus on the key points: {core}",
    "edge-case": (
        "I understand, but skipping or bypassing questions isn't possible in this interview format. "
        "{core} You can answer the current question, ask me to clarify it, or end the interview early."
    ),
    "standard": "{core}",
}

ADJUSTMENTS: Dict[BehaviorType, List[str]] = {
    "confused": ["added clarification guidance", "softened tone"],
    "efficient": ["trimmed to essentials"],
    "chatty": ["refocused on key points"],
    "edge-case": ["explained interview constraints", "offered valid alternatives"],
    "standard": [],
}

MAX_SENTENCES: Dict[BehaviorType, Optional[int]] = {
    "confused": None,
    "efficient": 2,
    "chatty": 2,
    "edge-case": None,
    "standard": None,
}


def _trim_sentences(text: str, max_sentences: int) -> str:
    text = (text or "").strip()
    if not text:
        return ""
    parts = re.split(r"(?<=[.!?:])\s+", text)
    kept: List[str] = []
    for part in parts:
        if part:
            kept.append(part.strip())
        if len(kept) >= max_sentences:
            break
    if not kept:
        kept = [text]
    return " ".join(kept).strip()


def acknowledgment(behavior: BehaviorType) -> str:
    return ACKNOWLEDGMENTS.get(behavior, ACKNOWLEDGMENTS["standard"])


def transition(behavior: BehaviorType) -> str:
    return TRANSITIONS.get(behavior, TRANSITIONS["standard"])


def adapt_response(content: str, behavior: BehaviorType) -> AdaptedResponse:
    """Rewrite ``content`` to match the verbosity and tone for ``behavior``."""

    template = TEMPLATES.get(behavior, "{core}")
    budget = MAX_SENTENCES.get(behavior)
    core = (content or "").strip()
    if budget:
        core = _trim_sentences(core, budget)
    formatted = re.sub(r"\s+", " ", template.replace("{core}", core)).strip()
    return AdaptedResponse(
        content=formatted,
        style=behavior,
        adjustments=list(ADJUSTMENTS.get(behavior, [])),
    )


__all__ = [
    "ACKNOWLEDGMENTS",
    "TEMPLATES",
    "TRANSITIONS",
    "acknowledgment",
    "adapt_response",
    "transition",
]
