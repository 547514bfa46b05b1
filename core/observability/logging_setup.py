"""
Bookstore logging setup.

Structured logs for the API process:
- JSON lines in production, human-readable text in development
- Request id from the middleware attached to every record
- Extra fields (path, error_code, book_id) surfaced when present
"""
from __future__ import annotations
from contextvars import ContextVar
from datetime import datetime, timezone
import json
import logging

# Set per request by api.middleware.RequestIdMiddleware
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

EXTRA_FIELDS = ("path", "method", "status_code", "duration_ms", "error_code", "book_id")


class RequestIdFilter(logging.Filter):
    """Stamp each record with the id of the request being handled."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class JSONFormatter(logging.Formatter):
    """Format logs as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = getattr(record, "request_id", None)
        if request_id:
            log["request_id"] = request_id
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "text") -> logging.Handler:
    """Configure the root logger once; repeated calls replace the handler."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_bookstore_handler", False):
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler._bookstore_handler = True  # type: ignore[attr-defined]
    handler.addFilter(RequestIdFilter())
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
