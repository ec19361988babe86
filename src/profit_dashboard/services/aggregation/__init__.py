"""Aggregation over profit records."""

from profit_dashboard.services.aggregation.aggregation_service import AggregationService

__all__ = ["AggregationService"]
