# -*- coding: utf-8 -*-
"""Event bus and event types."""

from profit_dashboard.events.bus import get_event_bus, set_event_bus
from profit_dashboard.events.profits import (
    DashboardLoadFailedEvent,
    ProfitSubmissionFailedEvent,
    ProfitSubmittedEvent,
)

__all__ = [
    "DashboardLoadFailedEvent",
    "ProfitSubmissionFailedEvent",
    "ProfitSubmittedEvent",
    "get_event_bus",
    "set_event_bus",
]
