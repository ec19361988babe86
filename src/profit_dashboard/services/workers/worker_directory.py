# -*- coding: utf-8 -*-
"""WorkerDirectoryService: registered workers joined with their profit totals."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

import structlog

from profit_dashboard.codec import ZERO
from profit_dashboard.events.profits import DashboardLoadFailedEvent
from profit_dashboard.exceptions import DashboardAPIError
from profit_dashboard.models.category_totals import CategoryTotals
from profit_dashboard.models.profit_record import ProfitRecord
from profit_dashboard.utils.validation import strip_handle

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from profit_dashboard.clients.dashboard_api import DashboardApiClient, WorkerSchema
    from profit_dashboard.config import Settings
    from profit_dashboard.services.aggregation import AggregationService


def initials(name: str | None) -> str:
    """Two-letter avatar text: first two letters of one word, or first letters of two words."""
    if not name:
        return "?"
    words = name.replace("@", "", 1).split()
    if not words:
        return "?"
    if len(words) == 1:
        return words[0][:2].upper()
    return "".join(w[0] for w in words[:2]).upper()


@dataclass(frozen=True)
class WorkerSummary:
    """One worker card: identity fields plus profit count and total."""

    handle: str
    display_name: str
    initials: str
    active: bool
    """True when the worker has a provider id (reachable in the bot)."""
    count: int = 0
    total_amount: Decimal = ZERO
    register_date: str | None = None


class WorkerDirectoryService:
    """Loads /api/workers and /api/profits concurrently and joins them by handle."""

    def __init__(
        self,
        api: DashboardApiClient,
        aggregation: AggregationService,
        settings: Settings,
        *,
        event_bus: Optional[Any] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._api = api
        self._aggregation = aggregation
        self._settings = settings
        self._event_bus: Optional["EventBus"] = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def load(self) -> list[WorkerSummary]:
        """Return one summary per registered worker; [] when either request fails."""
        try:
            workers, page = await asyncio.gather(
                self._api.get_workers(),
                self._api.get_profits(),
            )
        except DashboardAPIError as e:
            self._logger.error(
                "worker_directory_load_failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            if self._event_bus is not None:
                self._event_bus.dispatch(
                    DashboardLoadFailedEvent(operation="workers", error_message=str(e))
                )
            return []

        dash = self._settings.dashboard
        records = [
            ProfitRecord.from_response(
                raw,
                default_worker_percent=dash.default_worker_percent,
                unknown_service=dash.unknown_service,
                unknown_worker=dash.unknown_worker,
            )
            for raw in page.get("profits") or []
            if isinstance(raw, dict)
        ]
        totals = self._aggregation.by_worker(records)
        summaries = [self._summarize(w, totals) for w in workers if w.get("username")]
        self._logger.debug(
            "worker_directory_loaded",
            workers_count=len(summaries),
            profits_count=len(records),
        )
        return summaries

    def _summarize(self, worker: WorkerSchema, totals: dict[str, CategoryTotals]) -> WorkerSummary:
        handle = str(worker.get("username"))
        display_name = str(worker.get("name") or handle)
        bucket = totals.get(strip_handle(handle))
        telegram_id = worker.get("telegram_id")
        return WorkerSummary(
            handle=handle,
            display_name=display_name,
            initials=initials(display_name),
            active=bool(telegram_id and str(telegram_id).strip()),
            count=bucket.count if bucket else 0,
            total_amount=bucket.total_amount if bucket else ZERO,
            register_date=worker.get("register_date"),
        )
