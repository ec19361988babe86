"""AggregationService: per-service and per-worker totals over loaded records.

Pure in-memory computation, like PnLService: no I/O, no state.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from decimal import Decimal

from profit_dashboard.codec import ZERO
from profit_dashboard.models.aggregate_stats import AggregateStats
from profit_dashboard.models.category_totals import CategoryTotals
from profit_dashboard.models.profit_record import ProfitRecord


def _worker_key(record: ProfitRecord) -> str:
    # "@alice" and "alice" share a bucket; labels are otherwise compared verbatim
    return record.worker.removeprefix("@")


def _service_key(record: ProfitRecord) -> str:
    return record.service


class AggregationService:
    """Groups records into CategoryTotals and derives project averages."""

    def _group(
        self,
        records: Iterable[ProfitRecord],
        key: Callable[[ProfitRecord], str],
    ) -> dict[str, CategoryTotals]:
        counts: dict[str, int] = {}
        totals: dict[str, Decimal] = {}
        for record in records:
            k = key(record)
            counts[k] = counts.get(k, 0) + 1
            totals[k] = totals.get(k, ZERO) + record.amount
        return {
            k: CategoryTotals(key=k, count=counts[k], total_amount=totals[k])
            for k in counts
        }

    def by_service(self, records: Iterable[ProfitRecord]) -> dict[str, CategoryTotals]:
        """Totals keyed by exact service label, in first-seen order."""
        return self._group(records, _service_key)

    def by_worker(self, records: Iterable[ProfitRecord]) -> dict[str, CategoryTotals]:
        """Totals keyed by worker handle with a leading "@" removed."""
        return self._group(records, _worker_key)

    def average_per_record(self, stats: AggregateStats) -> Decimal:
        """Backend total divided by backend record count; 0 when there are no records."""
        if stats.record_count <= 0:
            return ZERO
        return stats.total_amount / Decimal(stats.record_count)

    def ranked(
        self,
        breakdown: Mapping[str, CategoryTotals] | Iterable[CategoryTotals],
    ) -> list[CategoryTotals]:
        """Buckets by total amount descending; ties keep their first-seen order."""
        buckets = breakdown.values() if isinstance(breakdown, Mapping) else breakdown
        return sorted(buckets, key=lambda b: b.total_amount, reverse=True)
