"""Session lifecycle management."""
from __future__ import annotations

import logging
import uuid
from typing import Callable, Dict, Optional, Tuple

from agents.types import (
    InteractionMode,
    JobRole,
    ResumeAnalysis,
    ResumeDocument,
    Session,
    SessionStatus,
    utcnow,
)
from observability.logger import log_event
from resume_analysis import analyze_resume, minimal_analysis
from services.errors import InvalidInputError, InvalidStateTransitionError, ResumeAnalysisError, SessionNotFoundError
from services.role_catalog import RoleCatalog, catalog as default_catalog
from storage.session_store import InMemorySessionStore, SessionStore

logger = logging.getLogger(__name__)

ResumeAnalyzer = Callable[[ResumeDocument, JobRole], ResumeAnalysis]

UPLOAD_RESUME = "upload resume"
START_INTERVIEW = "start interview"
SUBMIT_RESPONSE = "submit response"
COMPLETE_INTERVIEW = "complete interview"
END_EARLY = "end early"
CONTINUATION = "get continuation options"

# (current status, action) -> resulting status. Anything absent is rejected.
TRANSITIONS: Dict[Tuple[SessionStatus, str], SessionStatus] = {
    ("initialized", UPLOAD_RESUME): "initialized",
    ("initialized", START_INTERVIEW): "in-progress",
    ("in-progress", SUBMIT_RESPONSE): "in-progress",
    ("in-progress", COMPLETE_INTERVIEW): "completed",
    ("in-progress", END_EARLY): "ended-early",
    ("completed", CONTINUATION): "completed",
    ("ended-early", CONTINUATION): "ended-early",
}

TERMINAL_STATES = ("completed", "ended-early")
INTERACTION_MODES = ("text", "voice")


def next_status(current: SessionStatus, action: str) -> SessionStatus:
    """Resolve ``action`` against the transition table or raise."""

    target = TRANSITIONS.get((current, action))
    if target is None:
        raise InvalidStateTransitionError(current, action)
    return target


class SessionManager:
    """Owns session state and lifecycle transitions."""

    def __init__(
        self,
        store: Optional[SessionStore] = None,
        catalog: Optional[RoleCatalog] = None,
        resume_analyzer: ResumeAnalyzer = analyze_resume,
    ):
        self.store: SessionStore = store if store is not None else InMemorySessionStore()
        self.catalog = catalog or default_catalog
        self.resume_analyzer = resume_analyzer

    def create_session(
        self,
        role_id_or_name: str,
        level: str,
        interaction_mode: InteractionMode = "text",
    ) -> Session:
        role = self.catalog.resolve_role(role_id_or_name)
        experience_level = self.catalog.level(level)
        if interaction_mode not in INTERACTION_MODES:
            raise InvalidInputError(
                f'Invalid interaction mode: "{interaction_mode}". Please select from available options.',
                list(INTERACTION_MODES),
            )
        session = Session(
            id=str(uuid.uuid4()),
            role=role,
            experience_level=experience_level,
            interaction_mode=interaction_mode,
        )
        self.store.put(session)
        log_event("session_created", session.id, role=role.id, experience_level=experience_level.level)
        return session

    def get_session(self, session_id: str) -> Session:
        session = self.store.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def transition(self, session: Session, action: str) -> SessionStatus:
        """Apply ``action`` to ``session`` and persist the new status."""

        status = next_status(session.status, action)
        if status != session.status:
            log_event("status_changed", session.id, status=status, action=action)
        session.status = status
        if status in TERMINAL_STATES and session.end_time is None:
            session.end_time = utcnow()
        self.store.put(session)
        return status

    def require(self, session: Session, action: str) -> None:
        """Raise unless ``action`` is allowed from the current status."""

        next_status(session.status, action)

    def upload_resume(self, session_id: str, document: ResumeDocument) -> ResumeAnalysis:
        session = self.get_session(session_id)
        self.require(session, UPLOAD_RESUME)
        try:
            analysis = self.resume_analyzer(document, session.role)
        except ResumeAnalysisError as exc:
            logger.warning("resume analysis failed for session %s: %s", session_id, exc)
            log_event("resume_degraded", session_id, reason=str(exc))
            analysis = minimal_analysis(session.role)
        else:
            log_event(
                "resume_analyzed",
                session_id,
                skills=len(analysis.technical_skills),
                alignment=analysis.alignment_score.overall,
            )
        session.resume_analysis = analysis
        self.transition(session, UPLOAD_RESUME)
        return analysis

    def save(self, session: Session) -> None:
        self.store.put(session)

    def delete_session(self, session_id: str) -> bool:
        removed = self.store.delete(session_id)
        if removed:
            log_event("session_deleted", session_id)
        return removed


__all__ = [
    "COMPLETE_INTERVIEW",
    "CONTINUATION",
    "END_EARLY",
    "ResumeAnalyzer",
    "SUBMIT_RESPONSE",
    "START_INTERVIEW",
    "SessionManager",
    "TERMINAL_STATES",
    "TRANSITIONS",
    "UPLOAD_RESUME",
    "next_status",
]
