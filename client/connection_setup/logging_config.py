"""
Logging configuration for the connection setup client.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from connection_setup.config import Settings, get_settings

PACKAGE_LOGGER = "connection_setup"
TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def setup_logging(settings: Settings | None = None) -> logging.Logger:
    """
    Configure the package logger with a console handler.

    Returns:
        The configured package logger
    """
    settings = settings or get_settings()

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, settings.log_level))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if settings.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    logger.addHandler(handler)

    return logger
