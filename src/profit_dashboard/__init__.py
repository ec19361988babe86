"""Profit dashboard: async backend client, paged profit store and dashboard services."""

from profit_dashboard.clients import AsyncHttpClient, DashboardApiClient
from profit_dashboard.config import get_settings
from profit_dashboard.DI import Container
from profit_dashboard.services import DashboardSession

__version__ = "0.1.0"
__all__ = [
    "AsyncHttpClient",
    "Container",
    "DashboardApiClient",
    "DashboardSession",
    "get_settings",
]
