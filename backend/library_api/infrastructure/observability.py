"""Structured Logging — one root handler, JSON lines in production.

Invariants:
    - Each line carries the record's own creation time, level, logger and message
    - Request context passed via ``extra=`` (error_code, path, operation, entity_id,
      client) is copied into the JSON line when set
    - setup_logging is idempotent: re-entering the lifespan (tests, --reload) swaps
      the service handler instead of stacking a second one

Design Decisions:
    - stdlib logging with a hand-written formatter: the service logs a handful of
      fields and needs no processor pipeline
    - Service handler tagged by name so handlers owned by others (pytest caplog,
      uvicorn) are left alone
"""

import json
import logging
from datetime import datetime, timezone

HANDLER_NAME = "library_api"

CONTEXT_FIELDS = frozenset({
    "error_code", "path", "method", "operation", "entity_id", "client",
})

TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value) for key, value in vars(record).items()
            if key in CONTEXT_FIELDS and value is not None
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _build_handler(fmt: str) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    formatter = (
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT)
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the service handler on the root logger."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
        existing.close()
    handler = _build_handler(fmt)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
