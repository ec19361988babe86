"""Profit feed and submission events (emitted by the feed and submission services)."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from bubus import BaseEvent  # type: ignore[import-untyped]

LoadOperation = Literal["initial_page", "next_page", "statistics", "workers"]


class ProfitSubmittedEvent(BaseEvent[None]):
    """Emitted after a profit was accepted (by the backend, or locally in demo mode).

    Handled by ProfitEventsNotifier to tell the user.
    """

    amount: Decimal
    service: str
    worker: str
    worker_percent: int
    total_amount: Decimal
    profits_count: int
    telegram_info: str | None = None
    demo: bool = False


class ProfitSubmissionFailedEvent(BaseEvent[None]):
    """Emitted when a profit submission is rejected or the request fails."""

    reason: str
    """One of: validation_error, backend_rejected, request_failed."""
    error_message: str
    service: str | None = None
    worker: str | None = None


class DashboardLoadFailedEvent(BaseEvent[None]):
    """Emitted when loading dashboard data fails and the view degrades to defaults."""

    operation: LoadOperation
    error_message: str
    page_cursor: int | None = None
