# -*- coding: utf-8 -*-
"""DashboardSession: single owner of the dashboard's mutable state.

Holds the record store and the selected filter, and derives views,
breakdowns and statistics from them through the pure services.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

import structlog

from profit_dashboard.codec import format_grouped, format_limited
from profit_dashboard.models.aggregate_stats import AggregateStats
from profit_dashboard.models.category_totals import CategoryTotals
from profit_dashboard.models.profit_record import ProfitRecord
from profit_dashboard.services.filtering import FilterKind

if TYPE_CHECKING:
    from profit_dashboard.config import Settings
    from profit_dashboard.services.aggregation import AggregationService
    from profit_dashboard.services.filtering import ProfitFilterPolicy
    from profit_dashboard.services.records import ProfitFeedService, RecordStore


@dataclass(frozen=True)
class StatisticsReport:
    """Project totals with the derived average and the ranked service breakdown."""

    stats: AggregateStats
    average: Decimal
    total_text: str
    """Total in grouped style, e.g. "34.463"."""
    average_text: str
    """Average limited to max_decimals, e.g. "220,917"."""
    services: list[CategoryTotals]


class DashboardSession:
    """Coordinates loading, filtering and aggregation for one dashboard session."""

    def __init__(
        self,
        feed: ProfitFeedService,
        aggregation: AggregationService,
        filter_policy: ProfitFilterPolicy,
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the session.

        Args:
            feed: Feed that loads pages into its store.
            aggregation: Breakdown and average computations.
            filter_policy: View selection and ordering.
            settings: Application settings (uses settings.dashboard.max_decimals).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._feed = feed
        self._store: RecordStore = feed.store
        self._aggregation = aggregation
        self._filter_policy = filter_policy
        self._max_decimals = settings.dashboard.max_decimals
        self._filter_kind = FilterKind.ALL
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def filter_kind(self) -> FilterKind:
        return self._filter_kind

    @property
    def has_more(self) -> bool:
        return self._store.has_more

    async def refresh(self, *, now: datetime | None = None) -> list[ProfitRecord]:
        """Reset and reload the first page with project totals."""
        records = await self._feed.refresh(now=now)
        self._logger.info(
            "dashboard_refreshed",
            records_count=len(records),
            has_more=self._store.has_more,
        )
        return records

    async def load_more(self, *, now: datetime | None = None) -> list[ProfitRecord]:
        """Append the next page; no-op when there are no more pages."""
        if not self._store.has_more:
            return []
        return await self._feed.load_next(now=now)

    async def load_all(self, *, now: datetime | None = None) -> int:
        """Load pages until the backend reports no more. Returns the number of records appended."""
        appended = 0
        while self._store.has_more:
            appended += len(await self.load_more(now=now))
        self._logger.debug("dashboard_all_pages_loaded", records_appended=appended)
        return appended

    def set_filter(self, kind: FilterKind | str) -> FilterKind:
        """Select the view; an unknown kind selects "all"."""
        try:
            self._filter_kind = FilterKind.parse(kind)
        except ValueError:
            self._logger.warning("dashboard_unknown_filter_kind", filter_kind=str(kind))
            self._filter_kind = FilterKind.ALL
        return self._filter_kind

    def current_view(self, *, now: datetime | None = None) -> list[ProfitRecord]:
        """Records for the selected filter."""
        return self._filter_policy.apply(self._store.records, self._filter_kind, now=now)

    def service_breakdown(self) -> list[CategoryTotals]:
        """Loaded records per service, largest total first."""
        return self._aggregation.ranked(self._aggregation.by_service(self._store.records))

    def worker_breakdown(self) -> list[CategoryTotals]:
        """Loaded records per worker ("@" prefix ignored), largest total first."""
        return self._aggregation.ranked(self._aggregation.by_worker(self._store.records))

    def statistics_report(self) -> StatisticsReport:
        """Report for the store's totals and loaded records."""
        return self._build_report(self._store.stats, self._store.records)

    async def load_statistics(self, *, now: datetime | None = None) -> StatisticsReport:
        """Fetch fresh totals and the newest profits, and build a report from them.

        The store is not modified.
        """
        stats, records = await self._feed.fetch_statistics(now=now)
        return self._build_report(stats, records)

    def _build_report(
        self,
        stats: AggregateStats,
        records: Iterable[ProfitRecord],
    ) -> StatisticsReport:
        average = self._aggregation.average_per_record(stats)
        return StatisticsReport(
            stats=stats,
            average=average,
            total_text=format_grouped(stats.total_amount),
            average_text=format_limited(average, self._max_decimals),
            services=self._aggregation.ranked(self._aggregation.by_service(records)),
        )
