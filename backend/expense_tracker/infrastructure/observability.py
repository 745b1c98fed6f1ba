"""Structured Logging - JSON formatter, request trace ids, and logging setup.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (trace_id, user_id, expense_id, error_code, ...) surfaced when present
    - trace_id comes from the current request's context when not passed explicitly
    - JSON format in production, human-readable in development

Design Decisions:
    - ContextVar for the trace id: handlers log without threading request objects through
    - setup_logging called once on startup via lifespan
"""

import json
import logging
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

TRACE_ID_HEADER = "X-Request-ID"

_trace_id: ContextVar[str | None] = ContextVar("trace_id", default=None)

_EXTRA_FIELDS = (
    "trace_id", "user_id", "expense_id", "error_code", "path",
    "request_type", "failure_count",
)


def new_trace_id() -> str:
    return uuid.uuid4().hex


def bind_trace_id(trace_id: str):
    """Set the trace id for the current context. Returns a token for reset."""
    return _trace_id.set(trace_id)


def reset_trace_id(token) -> None:
    _trace_id.reset(token)


def current_trace_id() -> str | None:
    return _trace_id.get()


class TraceIdFilter(logging.Filter):
    """Copy the context trace id onto records that don't carry one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "trace_id", None) is None:
            record.trace_id = current_trace_id()
        return True


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = str(val) if key in ("user_id", "expense_id") else val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    handler.addFilter(TraceIdFilter())
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(trace_id)s] - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
