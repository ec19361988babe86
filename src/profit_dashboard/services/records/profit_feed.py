# -*- coding: utf-8 -*-
"""ProfitFeedService: loads profit pages from the backend (or demo data) into the RecordStore."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

import structlog
from structlog.contextvars import bound_contextvars

from profit_dashboard.events.profits import DashboardLoadFailedEvent, LoadOperation
from profit_dashboard.exceptions import DashboardAPIError
from profit_dashboard.models.aggregate_stats import AggregateStats
from profit_dashboard.models.profit_record import ProfitRecord
from profit_dashboard.services.demo import build_demo_payload

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from profit_dashboard.clients.dashboard_api import DashboardApiClient
    from profit_dashboard.config import Settings
    from profit_dashboard.services.records.record_store import RecordStore


class ProfitFeedService:
    """Fetches the first page, further pages and project statistics.

    Transport faults never reach the caller: they are logged, applied to the
    store (first page: cleared; next page: pagination closed) and announced
    with a DashboardLoadFailedEvent.
    """

    def __init__(
        self,
        api: DashboardApiClient,
        store: RecordStore,
        settings: Settings,
        *,
        event_bus: Optional[Any] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the feed.

        Args:
            api: Profit backend client.
            store: Store that receives the pages.
            settings: Application settings (uses settings.dashboard).
            event_bus: Optional; if set, emits DashboardLoadFailedEvent.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._api = api
        self._store = store
        self._demo_mode = settings.dashboard.demo_mode
        self._event_bus: Optional["EventBus"] = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def demo_mode(self) -> bool:
        return self._demo_mode

    async def load_initial(self, *, now: datetime | None = None) -> list[ProfitRecord]:
        """Load project totals and the first page (GET /api/data).

        Returns:
            The records now held by the store (empty on failure).
        """
        if self._demo_mode:
            payload: Any = build_demo_payload()
            self._logger.info("profit_feed_demo_data_loaded")
        else:
            try:
                payload = await self._api.get_project_data()
            except DashboardAPIError as e:
                self._logger.error(
                    "profit_feed_initial_load_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                    status_code=e.status_code,
                )
                self._store.fail_initial_load()
                self._emit_failed("initial_page", str(e))
                return []

        return self._store.load_initial_page(payload.get("profits"), payload, now=now)

    async def load_next(self, *, now: datetime | None = None) -> list[ProfitRecord]:
        """Load and append the next page (GET /api/profits?limit=&offset=).

        Returns:
            The appended records; empty when there is nothing more to load or
            the request failed.
        """
        store = self._store
        if not store.has_more:
            self._logger.debug("profit_feed_no_more_pages", page_cursor=store.page_cursor)
            return []
        if self._demo_mode:
            # demo data is a single page
            store.mark_exhausted()
            return []

        offset = store.page_cursor * store.page_size
        with bound_contextvars(page_cursor=store.page_cursor):
            try:
                data = await self._api.get_profits(limit=store.page_size, offset=offset)
            except DashboardAPIError as e:
                self._logger.error(
                    "profit_feed_next_page_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                    status_code=e.status_code,
                    offset=offset,
                )
                store.mark_exhausted()
                self._emit_failed("next_page", str(e), page_cursor=store.page_cursor)
                return []

            return store.load_next_page(
                data.get("profits"),
                has_more=bool(data.get("has_more", False)),
                now=now,
            )

    async def refresh(self, *, now: datetime | None = None) -> list[ProfitRecord]:
        """Reset the store and reload the first page."""
        self._store.reset()
        return await self.load_initial(now=now)

    async def fetch_statistics(
        self,
        *,
        now: datetime | None = None,
    ) -> tuple[AggregateStats, list[ProfitRecord]]:
        """Fetch project totals and the newest profits without touching the store.

        Returns:
            (stats, records); (zero stats, []) when the request or payload fails.
        """
        if self._demo_mode:
            payload: Any = build_demo_payload()
        else:
            try:
                payload = await self._api.get_project_data()
            except DashboardAPIError as e:
                self._logger.error(
                    "profit_feed_statistics_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                self._emit_failed("statistics", str(e))
                return AggregateStats.zero(), []

        try:
            stats = AggregateStats.from_response(payload)
            records = self._store.normalize(payload.get("profits") or [], now=now)
        except (TypeError, ValueError) as e:
            self._logger.warning(
                "profit_feed_statistics_malformed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            self._emit_failed("statistics", str(e))
            return AggregateStats.zero(), []
        return stats, records

    def _emit_failed(
        self,
        operation: LoadOperation,
        error_message: str,
        *,
        page_cursor: int | None = None,
    ) -> None:
        """Emit DashboardLoadFailedEvent for ProfitEventsNotifier."""
        if self._event_bus is None:
            return
        event = DashboardLoadFailedEvent(
            operation=operation,
            error_message=error_message,
            page_cursor=page_cursor,
        )
        self._event_bus.dispatch(event)
