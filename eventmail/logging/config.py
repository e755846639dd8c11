"""Log output for the eventmail command.

Records go to stderr, one per line, as 'key=value' text or as JSON objects.
Fields passed through 'extra' and the active profile name are written with
every record. stdout stays reserved for the dry-run preview and --list.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from .context import active_profile

KEY_VALUE_LAYOUT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Attributes every LogRecord has; anything else arrived through 'extra'.
RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def record_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Structured fields of record, sorted by name."""
    return {
        key: value
        for key, value in sorted(vars(record).items())
        if key not in RECORD_ATTRS and not key.startswith("_")
    }


def utc_timestamp(created: float) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2024-06-07T09:30:00.123Z."""
    moment = datetime.fromtimestamp(created, tz=timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


class ProfileFilter(logging.Filter):
    """Adds the active profile name unless the log call passed its own."""

    def filter(self, record: logging.LogRecord) -> bool:
        profile = active_profile()
        if profile is not None and not hasattr(record, "profile"):
            record.profile = profile
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": utc_timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(record_fields(record))
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    text = str(value)
    if any(char in text for char in " =,"):
        return f'"{text}"'
    return text


class KeyValueFormatter(logging.Formatter):
    """Human-readable lines: '<time> [LEVEL] logger: message key=value ...'."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = " ".join(f"{key}={format_value(value)}" for key, value in record_fields(record).items())
        return f"{line} {pairs}" if pairs else line


def configure_logging(level: str = "WARNING", format_type: str = "key-value") -> None:
    """
    Send log records to stderr at level, formatted as format_type.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL (any case)
        format_type: 'key-value' or 'json'

    Raises:
        ValueError: If level or format_type is invalid
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    if format_type == "json":
        formatter: logging.Formatter = JSONFormatter()
    elif format_type == "key-value":
        formatter = KeyValueFormatter(KEY_VALUE_LAYOUT, datefmt="%Y-%m-%d %H:%M:%S")
    else:
        raise ValueError(f"Invalid log format: {format_type}. Must be 'json' or 'key-value'")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.addFilter(ProfileFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers[:] = [handler]
