import logging

import observability.logger as obs
from services.sessions import SessionManager


def test_human_line_includes_known_keys():
    line = obs._format_human({"session_id": "s1", "kind": "follow_up", "reason": "too_short", "ignored": 1})
    assert line == "session=s1 kind=follow_up reason=too_short"


def test_log_event_emits_console_line(monkeypatch):
    records = []
    monkeypatch.setattr(obs, "_emit", lambda message, *, is_json, level: records.append((message, is_json, level)))
    obs.log_event("status_changed", "s1", status="completed", level=logging.WARNING)
    assert records == [("session=s1 kind=status_changed status=completed", False, logging.WARNING)]


def test_log_event_writes_json_when_enabled(monkeypatch):
    records = []
    monkeypatch.setattr(obs, "ENABLE_FILE_LOGS", True)
    monkeypatch.setattr(obs, "_ensure_handlers", lambda: None)
    monkeypatch.setattr(obs, "_emit", lambda message, *, is_json, level: records.append((message, is_json)))
    obs.log_event("session_created", "s2", role="software-engineer")
    assert len(records) == 2
    assert records[1][1] is True
    assert '"role": "software-engineer"' in records[1][0]


def test_session_creation_reaches_console_handlers():
    records = []

    class _Collect(logging.Handler):
        def emit(self, record):
            records.append(record)

    obs._ensure_handlers()
    collector = _Collect(level=logging.INFO)
    obs._logger.addHandler(collector)
    try:
        session = SessionManager().create_session("software-engineer", "mid")
    finally:
        obs._logger.removeHandler(collector)

    created = [record for record in records if "kind=session_created" in record.getMessage()]
    assert created and created[0].levelno == logging.INFO
    assert f"session={session.id}" in created[0].getMessage()
