"""Exceptions subpackage."""

from profit_dashboard.exceptions.exceptions import (
    DashboardAPIError,
    DashboardError,
    MissingRequiredConfigError,
    PaginationExhaustedError,
    RateLimitError,
)

__all__ = [
    "DashboardAPIError",
    "DashboardError",
    "MissingRequiredConfigError",
    "PaginationExhaustedError",
    "RateLimitError",
]
