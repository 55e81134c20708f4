"""Logging setup for the client and its scripts.

Records go to stderr so scripts can keep stdout for their JSON output.
Outside development each record is a single JSON object.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from vectorbucket.config import Environment, get_settings

# ``extra`` attributes copied into JSON records
CONTEXT_FIELDS = ("bucket", "index", "count", "region", "endpoint_url")

# AWS SDK loggers are chatty at INFO and below
QUIET_LOGGERS = ("boto3", "botocore", "urllib3")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with index context when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "file": f"{record.pathname}:{record.lineno}",
        }
        entry.update(
            (field, getattr(record, field))
            for field in CONTEXT_FIELDS
            if hasattr(record, field)
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


class DevFormatter(logging.Formatter):
    """Single-line formatter for terminals."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%H:%M:%S",
        )


def setup_logging(
    level: str | None = None,
    json_output: bool | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Install a single handler on the root logger.

    Args:
        level: Log level name. Defaults to ``LOG_LEVEL`` from settings.
        json_output: Emit JSON records. Defaults to True outside development.
        stream: Destination stream. Defaults to stderr.

    Returns:
        The root logger.
    """
    settings = get_settings()
    numeric_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    if json_output is None:
        json_output = settings.environment is not Environment.DEVELOPMENT

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JSONFormatter() if json_output else DevFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    """Get a named logger (typically ``__name__``)."""
    return logging.getLogger(name)
