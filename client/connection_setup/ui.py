"""
UI Collaborators

Notification and navigation seams between the controllers and whatever
view layer hosts them.
"""

import logging
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_VIEW = "/"
CONNECTIONS_VIEW = "/connections"
NEW_CONNECTION_VIEW = "/connection/new"


def connection_view(connection_id: str) -> str:
    return f"/connection/{connection_id}"


class Severity(str, Enum):
    """Notification severities."""

    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class Notifier(Protocol):
    """Fire-and-forget user notifications."""

    def notify(self, severity: Severity, message: str) -> None: ...


class Navigator(Protocol):
    """Moves the user to another view."""

    def navigate(self, to: str) -> None: ...


_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.SUCCESS: logging.INFO,
    Severity.ERROR: logging.ERROR,
}


class LoggingNotifier:
    """Notifier that writes notifications to the log. Used when no view is attached."""

    def notify(self, severity: Severity, message: str) -> None:
        logger.log(_LOG_LEVELS[severity], f"[{severity.value}] {message}")
