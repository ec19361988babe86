"""Notification subsystem."""

from profit_dashboard.notifications.notification_manager import NotificationService
from profit_dashboard.notifications.strategies import (
    BaseNotificationStrategy,
    ConsoleNotifier,
    TelegramNotifier,
)
from profit_dashboard.notifications.stylers import EventNotificationStyler
from profit_dashboard.notifications.types import (
    NotificationLevel,
    NotificationMessage,
    NotificationStyler,
)

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "EventNotificationStyler",
    "NotificationLevel",
    "NotificationMessage",
    "NotificationService",
    "NotificationStyler",
    "TelegramNotifier",
]
