# -*- coding: utf-8 -*-
"""RecordStore: append-ordered profit log with page cursor, has-more flag and totals.

Records are kept in arrival order (pages in the order they were fetched);
chronological order is a view concern handled by ProfitFilterPolicy.

Every mutation builds its new state first and assigns it in one step, so a
failure never leaves a partially applied page or a half-updated aggregate.
Single-threaded (event loop) access is assumed; a multi-threaded host must
serialize calls.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Mapping

import structlog

from profit_dashboard.codec import ZERO
from profit_dashboard.exceptions import PaginationExhaustedError
from profit_dashboard.models.aggregate_stats import AggregateStats
from profit_dashboard.models.profit_record import ProfitRecord

if TYPE_CHECKING:
    from profit_dashboard.config import Settings


class RecordStore:
    """Owns the loaded profit records, pagination state and project totals."""

    def __init__(
        self,
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize an empty store.

        Args:
            settings: Application settings (uses settings.dashboard).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        dash = settings.dashboard
        self._page_size = dash.page_size
        self._default_worker_percent = dash.default_worker_percent
        self._unknown_service = dash.unknown_service
        self._unknown_worker = dash.unknown_worker
        self._logger = get_logger(logger_name or self.__class__.__name__)

        self._records: list[ProfitRecord] = []
        self._page_cursor = 0
        self._has_more = True
        self._stats = AggregateStats.zero()

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def records(self) -> tuple[ProfitRecord, ...]:
        """Snapshot of the records in arrival order."""
        return tuple(self._records)

    @property
    def page_cursor(self) -> int:
        """Number of pages fetched since the last reset."""
        return self._page_cursor

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def stats(self) -> AggregateStats:
        return self._stats

    def __len__(self) -> int:
        return len(self._records)

    def normalize(
        self,
        raw_records: Sequence[Mapping[str, Any]],
        *,
        now: datetime | None = None,
    ) -> list[ProfitRecord]:
        """Map raw backend items to ProfitRecords with the configured defaults.

        Raises:
            TypeError: If an item is not an object.
        """
        return [
            ProfitRecord.from_response(
                raw,
                default_worker_percent=self._default_worker_percent,
                unknown_service=self._unknown_service,
                unknown_worker=self._unknown_worker,
                now=now,
            )
            for raw in raw_records
        ]

    def load_initial_page(
        self,
        raw_records: Sequence[Mapping[str, Any]] | None,
        backend_totals: Mapping[str, Any],
        *,
        now: datetime | None = None,
    ) -> list[ProfitRecord]:
        """Replace the store with the first page and the backend totals.

        Keeps at most page_size records; has_more is True when the backend sent
        more than that. Missing or empty profits mean "no data". Any failure
        (malformed payload) clears the store as fail_initial_load does.

        Returns:
            The records now held by the store.
        """
        try:
            if raw_records is None:
                raw_records = []
            if not isinstance(raw_records, Sequence) or isinstance(raw_records, (str, bytes)):
                raise TypeError(
                    f"profits must be an array, got {type(raw_records).__name__}"
                )
            records = self.normalize(raw_records[: self._page_size], now=now)
            stats = AggregateStats.from_response(backend_totals)
        except Exception as e:
            self._logger.exception(
                "record_store_initial_page_rejected",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            self.fail_initial_load()
            return []

        self._records = records
        self._has_more = len(raw_records) > self._page_size
        self._page_cursor = 1
        self._stats = stats
        self._logger.debug(
            "record_store_initial_page_loaded",
            records_loaded=len(records),
            records_received=len(raw_records),
            has_more=self._has_more,
            total_amount=str(stats.total_amount),
            record_count=stats.record_count,
            worker_count=stats.worker_count,
        )
        return list(records)

    def load_next_page(
        self,
        raw_records: Sequence[Mapping[str, Any]] | None,
        *,
        has_more: bool,
        now: datetime | None = None,
    ) -> list[ProfitRecord]:
        """Append the next page in arrival order.

        An empty page ends pagination without touching the cursor. A malformed
        page is dropped and ends pagination; existing records are untouched.

        Args:
            raw_records: Raw profit items of the page.
            has_more: Backend flag for further pages.

        Returns:
            The records appended.

        Raises:
            PaginationExhaustedError: If has_more is already False (caller bug).
        """
        if not self._has_more:
            raise PaginationExhaustedError(self._page_cursor)

        if not raw_records:
            self._has_more = False
            self._logger.debug(
                "record_store_pagination_exhausted",
                page_cursor=self._page_cursor,
                reason="empty_page",
            )
            return []

        try:
            page = self.normalize(raw_records, now=now)
        except Exception as e:
            self._logger.exception(
                "record_store_next_page_rejected",
                page_cursor=self._page_cursor,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            self.mark_exhausted()
            return []

        self._records = [*self._records, *page]
        self._page_cursor += 1
        self._has_more = bool(has_more)
        self._logger.debug(
            "record_store_next_page_loaded",
            page_cursor=self._page_cursor,
            records_appended=len(page),
            records_total=len(self._records),
            has_more=self._has_more,
        )
        return page

    def fail_initial_load(self) -> None:
        """First page could not be loaded: behave exactly like "no data"."""
        self._records = []
        self._stats = AggregateStats.zero()
        self._has_more = False
        self._page_cursor = 0

    def mark_exhausted(self) -> None:
        """Stop offering further pages (e.g. a next-page request failed)."""
        self._has_more = False

    def reset(self) -> None:
        """Clear records before a forced full refresh. Totals are kept until reloaded."""
        self._records = []
        self._page_cursor = 0
        self._has_more = True
        self._logger.debug("record_store_reset")

    def append_submitted(self, record: ProfitRecord) -> None:
        """Append a freshly submitted record at its arrival position (the end)."""
        self._records = [*self._records, record]

    def replace_stats(self, stats: AggregateStats) -> None:
        """Replace the project totals as a unit."""
        self._stats = stats

    def running_total(self) -> Decimal:
        """Highest project running total among loaded records (0 when empty)."""
        return max(
            (r.project_running_total for r in self._records),
            default=ZERO,
        )
