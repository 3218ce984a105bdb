from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

# Per-request context stamped on every record: which surface (api / ui / cli)
# handled the projection and under which request and Streamlit session.
_CONTEXT: Dict[str, ContextVar[str]] = {
    "request_id": ContextVar("request_id", default="-"),
    "session_id": ContextVar("session_id", default="-"),
    "surface": ContextVar("surface", default="-"),
}


def _logfmt_value(value: Any) -> str:
    text = str(value)
    if text == "" or any(c in text for c in ' ="'):
        return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return text


def format_fields(fields: Dict[str, Any]) -> str:
    """Render ``key=value`` pairs, quoting values with spaces, ``=`` or quotes."""
    return " ".join(f"{k}={_logfmt_value(v)}" for k, v in fields.items())


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        for key, var in _CONTEXT.items():
            setattr(record, key, var.get())
        return True


class ProjectionLogFormatter(logging.Formatter):
    """One line per record: timestamp, level, logger, context, then the message."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="milliseconds")
        head = {
            "ts": ts.replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            **{key: getattr(record, key, "-") for key in _CONTEXT},
        }
        line = f"{format_fields(head)} {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    lvl = getattr(logging, str(level).upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(lvl)

    # Streamlit reruns the script on every interaction
    root.handlers = []

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(lvl)
    handler.addFilter(ContextFilter())
    handler.setFormatter(ProjectionLogFormatter())
    root.addHandler(handler)


def set_log_context(*, request_id: str, session_id: Optional[str] = None, surface: Optional[str] = None) -> None:
    _CONTEXT["request_id"].set(request_id)
    if session_id is not None:
        _CONTEXT["session_id"].set(session_id)
    if surface is not None:
        _CONTEXT["surface"].set(surface)


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Log ``event key=value ...``; the event name comes first so lines grep cleanly."""
    if logger.isEnabledFor(level):
        logger.log(level, f"{event} {format_fields(fields)}" if fields else event)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"botmudra.{name}")
