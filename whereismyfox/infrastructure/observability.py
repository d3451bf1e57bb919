"""Structured Logging - log formatting for the whereismyfox service.

Invariants:
    - Every JSON line carries timestamp, level, logger and message
    - Registry context (device_id, user, command_ids) and request context
      (error_code, path) appear only when the call site supplied them
    - At most one whereismyfox handler on the root logger, however many apps
      run their lifespan in the process

Design Decisions:
    - stdlib logging + JSONFormatter: callers pass context through extra={...}
    - A repeated setup_logging reconfigures the installed handler in place
"""

import json
import logging
from datetime import datetime, timezone

_CONTEXT_FIELDS = (
    "device_id", "user", "command_ids", "error_code", "path",
)
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_NAME = "whereismyfox"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key)) for key in _CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _installed_handler() -> logging.Handler | None:
    for handler in logging.root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            return handler
    return None


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or reconfigure) the service log handler on the root logger."""
    handler = _installed_handler()
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        logging.root.addHandler(handler)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
