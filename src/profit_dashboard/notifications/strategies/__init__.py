"""Notification channels."""

from profit_dashboard.notifications.strategies.base import BaseNotificationStrategy
from profit_dashboard.notifications.strategies.console import ConsoleNotifier
from profit_dashboard.notifications.strategies.telegram import TelegramNotifier

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "TelegramNotifier",
]
