"""Logging configuration for the matchswitch logger namespace."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Literal

from matchswitch.config import get_settings

APP_LOGGER = "matchswitch"

# Keys the pipeline passes through ``extra=`` that belong in structured output
RUN_FIELDS = ("target_type", "token_count", "keyword_count", "duplicate_count", "invalid_count", "status")


def setup_logging(
    level: str | None = None,
    format_type: Literal["json", "text"] | None = None,
) -> logging.Logger:
    """
    Configure the ``matchswitch`` logger.

    Only the package namespace is touched, so a host application keeps its
    own root configuration. Records do not propagate to the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL); defaults to settings
        format_type: Output format (json or text); defaults to settings

    Returns:
        The configured package logger
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    format_type = format_type or settings.log_format

    app_logger = logging.getLogger(APP_LOGGER)
    app_logger.setLevel(getattr(logging, level))
    app_logger.propagate = False

    for handler in app_logger.handlers[:]:
        app_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level))

    if format_type == "json":
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    app_logger.addHandler(handler)
    return app_logger


class JsonFormatter(logging.Formatter):
    """JSON log formatter that keeps conversion run counters as fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in RUN_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)
