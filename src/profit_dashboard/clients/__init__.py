"""HTTP and API clients."""

from profit_dashboard.clients.dashboard_api import DashboardApiClient
from profit_dashboard.clients.http import AsyncHttpClient

__all__ = [
    "AsyncHttpClient",
    "DashboardApiClient",
]
