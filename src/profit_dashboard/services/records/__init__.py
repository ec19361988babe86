"""Profit record store and feed."""

from profit_dashboard.services.records.profit_feed import ProfitFeedService
from profit_dashboard.services.records.record_store import RecordStore

__all__ = [
    "ProfitFeedService",
    "RecordStore",
]
