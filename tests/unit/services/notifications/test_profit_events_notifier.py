# -*- coding: utf-8 -*-
"""Unit tests for ProfitEventsNotifier."""

from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace
from typing import Any
from unittest.mock import Mock

from profit_dashboard.events.profits import (
    DashboardLoadFailedEvent,
    ProfitSubmissionFailedEvent,
    ProfitSubmittedEvent,
)
from profit_dashboard.services.notifications import ProfitEventsNotifier


def _notifier(event_bus: Any) -> tuple[ProfitEventsNotifier, Mock]:
    notify = Mock()
    notifier = ProfitEventsNotifier(SimpleNamespace(notify=notify), event_bus)
    notifier.start()
    return notifier, notify


def _handler(event_bus: Any, event_type: type[Any]) -> Any:
    (handler,) = event_bus.handlers[event_type.__name__]
    return handler


def test_start_and_stop_manage_subscriptions(event_bus: Any) -> None:
    notifier, _ = _notifier(event_bus)

    assert set(event_bus.handlers) == {
        "ProfitSubmittedEvent",
        "ProfitSubmissionFailedEvent",
        "DashboardLoadFailedEvent",
    }

    notifier.stop()

    assert all(handlers == [] for handlers in event_bus.handlers.values())


def test_submitted_event_becomes_success_notification(event_bus: Any) -> None:
    _, notify = _notifier(event_bus)

    _handler(event_bus, ProfitSubmittedEvent)(
        ProfitSubmittedEvent(
            amount=Decimal("5400"),
            service="WalletPay",
            worker="alice",
            worker_percent=70,
            total_amount=Decimal("39863"),
            profits_count=157,
            telegram_info="sent",
        )
    )

    message = notify.call_args.args[0]
    assert message.event_type == "profit_submitted"
    assert message.level == "success"
    assert message.message == "Profit of 5.400 ₽ added"
    assert message.payload["total_amount"] == Decimal("39863")
    assert message.payload["telegram_info"] == "sent"


def test_demo_submission_is_marked(event_bus: Any) -> None:
    _, notify = _notifier(event_bus)

    _handler(event_bus, ProfitSubmittedEvent)(
        ProfitSubmittedEvent(
            amount=Decimal("100"),
            service="s",
            worker="w",
            worker_percent=70,
            total_amount=Decimal("100"),
            profits_count=1,
            demo=True,
        )
    )

    message = notify.call_args.args[0]
    assert message.message.endswith("(demo)")
    assert "telegram_info" not in message.payload


def test_validation_failure_is_a_warning(event_bus: Any) -> None:
    _, notify = _notifier(event_bus)

    _handler(event_bus, ProfitSubmissionFailedEvent)(
        ProfitSubmissionFailedEvent(reason="validation_error", error_message="All fields are required")
    )

    message = notify.call_args.args[0]
    assert message.level == "warning"
    assert message.message == "Error adding profit: All fields are required"
    assert message.payload == {"reason": "validation_error"}


def test_backend_failure_is_an_error(event_bus: Any) -> None:
    _, notify = _notifier(event_bus)

    _handler(event_bus, ProfitSubmissionFailedEvent)(
        ProfitSubmissionFailedEvent(
            reason="request_failed",
            error_message="timeout",
            service="WalletPay",
            worker="alice",
        )
    )

    message = notify.call_args.args[0]
    assert message.level == "error"
    assert message.payload == {"reason": "request_failed", "service": "WalletPay", "worker": "alice"}


def test_load_failure_uses_operation_label(event_bus: Any) -> None:
    _, notify = _notifier(event_bus)

    _handler(event_bus, DashboardLoadFailedEvent)(
        DashboardLoadFailedEvent(operation="next_page", error_message="HTTP 502", page_cursor=3)
    )

    message = notify.call_args.args[0]
    assert message.event_type == "dashboard_load_failed"
    assert message.message == "Failed to load more profits: HTTP 502"
    assert message.payload == {"operation": "next_page", "page_cursor": 3}
