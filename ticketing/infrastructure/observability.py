"""Structured Logging: one JSON object per line, keyed by ticket/respond/user ids.

Invariants:
    - Every line carries timestamp (record creation time, UTC), level, logger and message
    - Ticketing extras (ticket_id, respond_id, user_id, master_id, subject, ...) appear only when set
    - A logged TicketingError contributes its code and category even without extra=
    - setup_logging() is idempotent: calling it again replaces its own handler, never stacks

Design Decisions:
    - stdlib logging + json: the formatter is small and the service has no other log sink
    - Per-request chatter from httpx (taxonomy calls) and the SQLAlchemy engine held at WARNING
      unless DEBUG is requested
"""

import json
import logging
from datetime import datetime, timezone

from ticketing.core.errors import TicketingError

_EXTRA_FIELDS = (
    "ticket_id", "respond_id", "user_id", "master_id",
    "error_code", "subject", "attempt", "path",
)
_NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")
_HANDLER_NAME = "ticketing"


class JSONFormatter(logging.Formatter):
    """Render a LogRecord as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, record.__dict__[key]) for key in _EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            error = record.exc_info[1]
            if isinstance(error, TicketingError):
                entry.setdefault("error_code", error.code)
                entry["error_category"] = error.category.value
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the service handler on the root logger and return it."""
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)

    root_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(root_level)
    noisy_level = root_level if root_level <= logging.DEBUG else max(root_level, logging.WARNING)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)
    return handler
