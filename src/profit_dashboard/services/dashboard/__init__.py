"""Dashboard session."""

from profit_dashboard.services.dashboard.dashboard_session import (
    DashboardSession,
    StatisticsReport,
)

__all__ = [
    "DashboardSession",
    "StatisticsReport",
]
