"""JSON logging for the homework assigner.

The interactive prompts own stdout, so log records never go there: they are
written to stderr, or appended to a file when one is configured so that a
prompt session stays readable even at DEBUG.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Everything a bare LogRecord carries; whatever else is on a record came from `extra=`.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


def normalize_log_level(value: str) -> str:
    """Return the canonical name of a log level, accepting any case.

    Raises:
        ValueError: If `value` is not one of `LOG_LEVELS`.
    """
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {value!r}; expected one of {', '.join(LOG_LEVELS)}")
    return level


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with `extra=` fields nested under "extra"."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # Payload fields may hold models or exceptions; fall back to their str().
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str, *, log_file: Path | None = None) -> logging.Handler:
    """Install a single JSON handler on the root logger and return it.

    Args:
        level: Level name, any case (see `LOG_LEVELS`).
        log_file: Append records here instead of writing them to stderr.

    Raises:
        ValueError: If `level` is not a known level name.
    """
    root = logging.getLogger()
    root.setLevel(normalize_log_level(level))

    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler: logging.Handler
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)

    # requests logs every connection through urllib3 at DEBUG.
    logging.getLogger("urllib3").setLevel(max(root.level, logging.INFO))
    return handler
