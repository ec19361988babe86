"""Filtering and ordering of profit records."""

from profit_dashboard.services.filtering.filter_policy import (
    DEFAULT_TOP_LIMIT,
    FilterKind,
    ProfitFilterPolicy,
)

__all__ = [
    "DEFAULT_TOP_LIMIT",
    "FilterKind",
    "ProfitFilterPolicy",
]
