"""Event-driven notifiers."""

from profit_dashboard.services.notifications.profit_events_notifier import ProfitEventsNotifier

__all__ = ["ProfitEventsNotifier"]
