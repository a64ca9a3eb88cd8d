"""Error taxonomy shared by the interview engine."""
from __future__ import annotations

from typing import List, Optional, Sequence


class InterviewError(Exception):
    """Base class for interview engine failures."""


class InvalidInputError(InterviewError):
    """Unknown role, level or other identifier supplied by the caller."""

    def __init__(self, message: str, options: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.message = message
        self.options: List[str] = list(options or [])


class SessionNotFoundError(InterviewError):
    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


class InvalidStateTransitionError(InterviewError):
    """Lifecycle action attempted from a state that does not allow it."""

    def __init__(self, current_state: str, action: str):
        super().__init__(f"Cannot {action} while session is {current_state}")
        self.current_state = current_state
        self.action = action


class ResumeAnalysisError(InterviewError):
    """Raised by the resume analysis collaborator when a document cannot be read."""


__all__ = [
    "InterviewError",
    "InvalidInputError",
    "InvalidStateTransitionError",
    "ResumeAnalysisError",
    "SessionNotFoundError",
]
