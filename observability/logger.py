"""Structured logging utilities for interview session events."""
from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
import time
import uuid
from typing import Any

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ENABLE_FILE_LOGS = os.getenv("ENABLE_FILE_LOGS", "0") in ("1", "true", "True")
LOG_FILE = os.getenv("LOG_FILE", "logs/interview_engine.log")
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", "5242880"))
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "5"))

HUMAN_KEYS = ("status", "action", "question_id", "behavior", "reason", "score", "grade")

_logger = logging.getLogger("interview_engine")
_logger.setLevel(LOG_LEVEL)
_logger.propagate = False


def _human_formatter() -> logging.Formatter:
    return logging.Formatter(
        "[%(asctime)s] %(levelname)s %(name)s :: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _rotating(path: str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
    )
    handler.setLevel(LOG_LEVEL)
    return handler


def _json_only(record: logging.LogRecord) -> bool:
    return getattr(record, "is_json", False) is True


def _human_only(record: logging.LogRecord) -> bool:
    return not _json_only(record)


def _ensure_handlers() -> None:
    if _logger.handlers:
        return

    console = logging.StreamHandler(stream=sys.stdout)
    console.setLevel(LOG_LEVEL)
    console.setFormatter(_human_formatter())
    console.addFilter(_human_only)
    _logger.addHandler(console)

    if not ENABLE_FILE_LOGS:
        return

    target_dir = os.path.dirname(LOG_FILE)
    if target_dir:
        os.makedirs(target_dir, exist_ok=True)

    # <name>.log carries JSON events, <name>-human.log mirrors the console.
    stem, _ = os.path.splitext(LOG_FILE)
    for path, formatter, accept in (
        (LOG_FILE, logging.Formatter("%(message)s"), _json_only),
        (f"{stem}-human.log", _human_formatter(), _human_only),
    ):
        handler = _rotating(path)
        handler.setFormatter(formatter)
        handler.addFilter(accept)
        _logger.addHandler(handler)


def _format_human(evt: dict[str, Any]) -> str:
    parts = [f"session={evt.get('session_id')}", f"kind={evt.get('kind')}"]
    parts.extend(f"{key}={evt[key]}" for key in HUMAN_KEYS if key in evt)
    return " ".join(parts)


def _emit(message: str, *, is_json: bool, level: int) -> None:
    record = _logger.makeRecord(
        name=_logger.name,
        level=level,
        fn="",
        lno=0,
        msg=message,
        args=(),
        exc_info=None,
    )
    record.is_json = is_json  # type: ignore[attr-defined]
    _logger.handle(record)


def log_event(kind: str, session_id: str, *, level: int = logging.INFO, **fields: Any) -> None:
    """Emit a human line to the console and, when enabled, JSON/human lines to files."""

    _ensure_handlers()

    payload: dict[str, Any] = {
        "ts": time.time(),
        "trace": str(uuid.uuid4()),
        "kind": kind,
        "session_id": session_id,
    }
    payload.update(fields)

    _emit(_format_human(payload), is_json=False, level=level)
    if ENABLE_FILE_LOGS:
        _emit(json.dumps(payload, ensure_ascii=False, default=str), is_json=True, level=level)


__all__ = ["log_event"]
