"""Structured logging for coachgen.

Modules attach context with ``extra={"coachgen_<field>": value}``. The JSON
formatter emits those fields under their short name; the text formatter
appends them as ``key=value`` pairs so CLI runs keep the program context.

Controlled via COACHGEN_LOG_FORMAT ("json" default, or "text") and
COACHGEN_LOG_LEVEL.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

EXTRA_PREFIX = "coachgen_"
LOG_FORMATS = ("json", "text")

# Chatty at INFO (one line per HTTP request / connection)
_LIBRARY_LOGGERS = ("httpx", "httpcore", "psycopg")


def context_fields(record: logging.LogRecord) -> dict[str, Any]:
    """The record's coachgen_* extras, keyed without the prefix."""
    return {
        key[len(EXTRA_PREFIX):]: value
        for key, value in record.__dict__.items()
        if key.startswith(EXTRA_PREFIX)
    }


class JSONFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in context_fields(record).items():
            log_entry.setdefault(key, value)

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


class ContextTextFormatter(logging.Formatter):
    """Plain text lines with the coachgen context appended in brackets."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        fields = context_fields(record)
        if fields:
            line += " [" + " ".join(f"{key}={value}" for key, value in sorted(fields.items())) + "]"
        return line


def setup_logging(
    log_format: str, level: int | str = logging.INFO, stream: TextIO | None = None,
) -> None:
    """Configure the root logger with either JSON or plaintext output."""
    if log_format not in LOG_FORMATS:
        raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}")
    if isinstance(level, str):
        known = logging.getLevelNamesMapping()
        if level.upper() not in known:
            raise ValueError(f"unknown log level: {level!r}")
        level = known[level.upper()]

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if log_format == "json" else ContextTextFormatter())
    root.addHandler(handler)

    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
