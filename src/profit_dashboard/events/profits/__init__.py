# -*- coding: utf-8 -*-
"""Profit events."""

from profit_dashboard.events.profits.profit_events import (
    DashboardLoadFailedEvent,
    LoadOperation,
    ProfitSubmissionFailedEvent,
    ProfitSubmittedEvent,
)

__all__ = [
    "DashboardLoadFailedEvent",
    "LoadOperation",
    "ProfitSubmissionFailedEvent",
    "ProfitSubmittedEvent",
]
