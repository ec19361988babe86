# -*- coding: utf-8 -*-
"""Domain models."""

from profit_dashboard.models.aggregate_stats import AggregateStats
from profit_dashboard.models.category_totals import CategoryTotals
from profit_dashboard.models.identity import IdentityRecord, IdentitySource
from profit_dashboard.models.profit_record import ProfitRecord

__all__ = [
    "AggregateStats",
    "CategoryTotals",
    "IdentityRecord",
    "IdentitySource",
    "ProfitRecord",
]
