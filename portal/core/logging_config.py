"""
Logging configuration.

- local/dev: human-readable single-line format
- anything else: JSON lines for the log aggregator
- level: LOG_LEVEL env (default DEBUG when debug=True, else INFO)
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from portal.core.config import settings

# Extra fields that services pass via `extra=`
_CONTEXT_KEYS = (
    "deliverable_id",
    "actor_id",
    "actor_kind",
    "method",
    "path",
    "status",
)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        for key in _CONTEXT_KEYS:
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = str(val)
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


class ReadableFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now().strftime("%H:%M:%S")
        ctx = " ".join(
            f"{key}={getattr(record, key)}"
            for key in _CONTEXT_KEYS
            if getattr(record, key, None) is not None
        )
        line = f"{ts} {record.levelname:<8} {record.name}: {record.getMessage()}"
        if ctx:
            line = f"{line} [{ctx}]"
        if record.exc_info and record.exc_info[0] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging() -> None:
    """Attach one stderr handler to the `portal` logger tree."""
    root = logging.getLogger("portal")
    root.setLevel(settings.effective_log_level)

    # idempotent: app factory may run more than once (tests)
    if any(getattr(h, "_portal_handler", False) for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler._portal_handler = True  # type: ignore[attr-defined]
    if settings.env in ("local", "dev", "development"):
        handler.setFormatter(ReadableFormatter())
    else:
        handler.setFormatter(JSONFormatter())
    root.addHandler(handler)
