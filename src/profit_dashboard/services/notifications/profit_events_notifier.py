# -*- coding: utf-8 -*-
"""ProfitEventsNotifier: turns profit and loading events into user notifications."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from profit_dashboard.codec import format_grouped
from profit_dashboard.events.profits import (
    DashboardLoadFailedEvent,
    ProfitSubmissionFailedEvent,
    ProfitSubmittedEvent,
)
from profit_dashboard.notifications.types import NotificationMessage

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from profit_dashboard.notifications.notification_manager import NotificationService


_LOAD_LABELS = {
    "initial_page": "Failed to load profits",
    "next_page": "Failed to load more profits",
    "statistics": "Failed to load statistics",
    "workers": "Failed to load workers",
}


class ProfitEventsNotifier:
    """Subscribes to profit events on the bus and sends notifications via NotificationService."""

    _EVENT_TYPES = (ProfitSubmittedEvent, ProfitSubmissionFailedEvent, DashboardLoadFailedEvent)

    def __init__(
        self,
        notification_service: "NotificationService",
        event_bus: Any,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._notification_service = notification_service
        self._event_bus: "EventBus" = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def start(self) -> None:
        """Subscribe to the profit events."""
        self._event_bus.on(ProfitSubmittedEvent, self._on_submitted)
        self._event_bus.on(ProfitSubmissionFailedEvent, self._on_submission_failed)
        self._event_bus.on(DashboardLoadFailedEvent, self._on_load_failed)
        self._logger.debug("profit_events_notifier_started")

    def stop(self) -> None:
        """Unsubscribe from the profit events."""
        handlers = getattr(self._event_bus, "handlers", {})
        own = (self._on_submitted, self._on_submission_failed, self._on_load_failed)
        for event_type in self._EVENT_TYPES:
            key = event_type.__name__
            if key in handlers:
                handlers[key] = [h for h in handlers[key] if h not in own]
        self._logger.debug("profit_events_notifier_stopped")

    def _on_submitted(self, event: ProfitSubmittedEvent) -> None:
        message = f"Profit of {format_grouped(event.amount)} ₽ added"
        if event.demo:
            message += " (demo)"
        payload: dict[str, Any] = {
            "amount": event.amount,
            "service": event.service,
            "worker": event.worker,
            "worker_percent": event.worker_percent,
            "total_amount": event.total_amount,
            "profits_count": event.profits_count,
        }
        if event.telegram_info:
            payload["telegram_info"] = event.telegram_info
        self._notification_service.notify(
            NotificationMessage(
                event_type="profit_submitted",
                message=message,
                level="success",
                payload=payload,
            )
        )
        self._logger.debug("profit_submitted_notified", service=event.service, worker=event.worker)

    def _on_submission_failed(self, event: ProfitSubmissionFailedEvent) -> None:
        level = "warning" if event.reason == "validation_error" else "error"
        payload: dict[str, Any] = {"reason": event.reason}
        if event.service:
            payload["service"] = event.service
        if event.worker:
            payload["worker"] = event.worker
        self._notification_service.notify(
            NotificationMessage(
                event_type="profit_submission_failed",
                message=f"Error adding profit: {event.error_message}",
                level=level,
                payload=payload,
            )
        )
        self._logger.debug("profit_submission_failed_notified", reason=event.reason)

    def _on_load_failed(self, event: DashboardLoadFailedEvent) -> None:
        label = _LOAD_LABELS.get(event.operation, "Failed to load data")
        payload: dict[str, Any] = {"operation": event.operation}
        if event.page_cursor is not None:
            payload["page_cursor"] = event.page_cursor
        self._notification_service.notify(
            NotificationMessage(
                event_type="dashboard_load_failed",
                message=f"{label}: {event.error_message}",
                level="error",
                payload=payload,
            )
        )
        self._logger.debug("dashboard_load_failed_notified", operation=event.operation)
