"""Notification stylers."""

from profit_dashboard.notifications.stylers.notification_styler import EventNotificationStyler

__all__ = ["EventNotificationStyler"]
