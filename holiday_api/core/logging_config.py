"""
Log setup shared by the API server and the CLI.

Two output styles:
- json: one JSON object per line, for the server behind a log collector
- human: coloured single lines for a terminal

    from holiday_api.core.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__)
    logger.info("Saved holidays", extra={'year': 2024, 'count': 27})
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

PACKAGE_PREFIX = "holiday_api."

# Attributes present on every LogRecord; anything else arrived through extra=
RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "color_message", "taskName"}

ANSI_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
ANSI_RESET = "\033[0m"


def extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Fields attached to a record through ``extra=``."""
    return {
        key: value for key, value in record.__dict__.items()
        if key not in RECORD_ATTRIBUTES and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """
    One JSON document per record:

        {"timestamp": "2024-01-01T00:01:00.012+00:00", "level": "INFO",
         "logger": "holiday_api.services.scheduler", "message": "...", "year": 2024}
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in extra_fields(record).items():
            payload.setdefault(key, _json_safe(value))

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def _json_safe(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class HumanFormatter(logging.Formatter):
    """
    Terminal output:

        2024-01-01 00:01:00 INFO  [services.scheduler] January 1st detected (year=2024)
    """

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")

        level = record.levelname.ljust(5)
        if self.use_colors and record.levelname in ANSI_COLORS:
            level = f"{ANSI_COLORS[record.levelname]}{level}{ANSI_RESET}"

        name = record.name
        if name.startswith(PACKAGE_PREFIX):
            name = name[len(PACKAGE_PREFIX):]

        line = f"{stamp} {level} [{name}] {record.getMessage()}"

        extras = extra_fields(record)
        if extras:
            line += " (" + ", ".join(f"{k}={v}" for k, v in extras.items()) + ")"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


def setup_logging(
    json_format: Optional[bool] = None,
    level: Optional[str] = None,
    logger_name: Optional[str] = None
) -> None:
    """
    Install a single stderr handler on a logger.

    Args:
        json_format: JSON lines (True) or human-readable (False).
                     None reads LOG_FORMAT ("json" or "human").
        level: Level name; None reads LOG_LEVEL, falling back to INFO.
        logger_name: Logger to configure; None means the root logger.
                     A named logger stops propagating to avoid double output.
    """
    if json_format is None:
        json_format = os.getenv("LOG_FORMAT", "human").lower() == "json"

    numeric_level = getattr(logging, (level or os.getenv("LOG_LEVEL", "INFO")).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(JsonFormatter() if json_format else HumanFormatter())

    logger = logging.getLogger(logger_name)
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.addHandler(handler)

    if logger_name:
        logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
