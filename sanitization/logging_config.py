# sanitization/logging_config.py

"""JSON logging for the sanitizer service and UI.

Every record is emitted as a single JSON object. Context passed through
``extra=`` becomes top-level keys; raw text payloads are never written,
only their length.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

# Keys present on every LogRecord; anything else arrived through ``extra``
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

# Extra keys that may carry user text; replaced by their length
TEXT_KEYS = frozenset({"text", "original_text", "sanitized_text", "cleaned"})

NOISY_LOGGERS = ("streamlit", "watchdog", "urllib3", "emoji")


def _context_fields(record: logging.LogRecord) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    for key, value in vars(record).items():
        if key in _STANDARD_ATTRS:
            continue
        if key in TEXT_KEYS and isinstance(value, str):
            fields[f"{key}_length"] = len(value)
        else:
            fields[key] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """Formats records as one-line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        for key, value in _context_fields(record).items():
            payload.setdefault(key, value)

        return json.dumps(payload, default=str, ensure_ascii=True)


def configure_logging(
    level: str = "INFO", stream: Optional[TextIO] = None
) -> logging.Handler:
    """Routes all logging through a single JSON handler.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown
            names fall back to INFO
        stream: Output stream, stdout by default

    Returns:
        The installed handler
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(StructuredFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured successfully",
        extra={"log_level": logging.getLevelName(log_level)},
    )
    return handler
