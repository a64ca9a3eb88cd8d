"""Session storage abstraction for the interview engine."""
from __future__ import annotations

from typing import Dict, List, Optional, Protocol

from agents.types import Session


class SessionStore(Protocol):
    """Minimal get/put/delete contract a backing store must satisfy."""

    def get(self, session_id: str) -> Optional[Session]:
        ...

    def put(self, session: Session) -> None:
        ...

    def delete(self, session_id: str) -> bool:
        ...

    def ids(self) -> List[str]:
        ...


class InMemorySessionStore:
    """Process-lifetime store keyed by session id."""

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}

    def get(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def put(self, session: Session) -> None:
        self._sessions[session.id] = session

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def ids(self) -> List[str]:
        return list(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)


__all__ = ["InMemorySessionStore", "SessionStore"]
