from __future__ import annotations

"""
User Notifications.

The synchronization layer reports state changes and failures to the user
through a fire-and-forget sink. The default sink writes them to the log.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """
    A message for the user.

    Attributes:
        type: Severity category.
        message: Text to display.
        duration: Display time in milliseconds, None for the UI default.
    """
    type: NotificationType
    message: str
    duration: Optional[int] = None


NotificationSink = Callable[[Notification], None]

_LOG_LEVELS: Dict[NotificationType, int] = {
    NotificationType.INFO: logging.INFO,
    NotificationType.SUCCESS: logging.INFO,
    NotificationType.WARNING: logging.WARNING,
    NotificationType.ERROR: logging.ERROR,
}


def log_notification(notification: Notification) -> None:
    """Default sink: forward the notification to the application log."""
    logger.log(_LOG_LEVELS[notification.type], f"[{notification.type.value}] {notification.message}")
