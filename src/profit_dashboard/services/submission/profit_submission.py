# -*- coding: utf-8 -*-
"""ProfitSubmissionService: validates and records a new profit."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

import structlog
from structlog.contextvars import bound_contextvars

from profit_dashboard.codec import parse_amount
from profit_dashboard.events.profits import (
    ProfitSubmissionFailedEvent,
    ProfitSubmittedEvent,
)
from profit_dashboard.exceptions import DashboardAPIError
from profit_dashboard.models.profit_record import ProfitRecord
from profit_dashboard.utils.dates import local_now
from profit_dashboard.utils.validation import is_blank, strip_handle

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from profit_dashboard.clients.dashboard_api import DashboardApiClient
    from profit_dashboard.config import Settings
    from profit_dashboard.services.records import ProfitFeedService, RecordStore


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of a submission (success flag + backend totals or error for the user)."""

    success: bool
    error: str | None = None
    total_amount: Decimal | None = None
    profits_count: int | None = None
    telegram_info: str | None = None
    record: ProfitRecord | None = None
    """Record appended locally (demo mode only)."""


class _ValidationError(ValueError):
    pass


def _parse_percent(value: Any) -> int:
    if isinstance(value, bool):
        raise _ValidationError("Worker percent must be an integer")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise _ValidationError("Worker percent must be an integer") from None


class ProfitSubmissionService:
    """Submits profits to the backend (or to the local store in demo mode)."""

    def __init__(
        self,
        api: DashboardApiClient,
        feed: ProfitFeedService,
        settings: Settings,
        *,
        event_bus: Optional[Any] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the service.

        Args:
            api: Profit backend client.
            feed: Feed used to reload the first page after a submission.
            settings: Application settings (uses settings.dashboard).
            event_bus: Optional; if set, emits ProfitSubmittedEvent and
                ProfitSubmissionFailedEvent.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._api = api
        self._feed = feed
        self._store: RecordStore = feed.store
        self._settings = settings
        self._event_bus: Optional["EventBus"] = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def submit(
        self,
        *,
        amount_text: Any,
        worker_percent: Any,
        service: Any,
        worker_username: Any,
        added_by: Optional[int] = None,
        now: datetime | None = None,
    ) -> SubmissionResult:
        """Validate the form values and record the profit.

        All fields are required; the parsed amount must be positive and the
        worker percent an integer. A leading "@" is removed from the worker
        handle.

        Returns:
            SubmissionResult; never raises for validation or transport faults.
        """
        try:
            if any(is_blank(v) for v in (amount_text, worker_percent, service, worker_username)):
                raise _ValidationError("All fields are required")
            amount = parse_amount(amount_text)
            if amount <= 0:
                raise _ValidationError("Amount must be greater than zero")
            percent = _parse_percent(worker_percent)
            worker = strip_handle(worker_username)
            if not worker:
                raise _ValidationError("All fields are required")
        except _ValidationError as e:
            self._logger.info("profit_submission_invalid", error_message=str(e))
            self._emit_failed("validation_error", str(e))
            return SubmissionResult(success=False, error=str(e))

        service_label = str(service)
        with bound_contextvars(service=service_label, worker=worker):
            if self._feed.demo_mode:
                return self._submit_local(amount, percent, service_label, worker, now=now)
            return await self._submit_remote(amount, percent, service_label, worker, added_by)

    async def _submit_remote(
        self,
        amount: Decimal,
        percent: int,
        service: str,
        worker: str,
        added_by: Optional[int],
    ) -> SubmissionResult:
        try:
            response = await self._api.submit_profit(
                amount=amount,
                worker_percent=percent,
                service=service,
                worker_username=worker,
                added_by=added_by,
            )
        except DashboardAPIError as e:
            self._logger.error(
                "profit_submission_request_failed",
                error_type=type(e).__name__,
                error_message=str(e),
                status_code=e.status_code,
            )
            self._emit_failed("request_failed", str(e), service=service, worker=worker)
            return SubmissionResult(success=False, error=str(e))

        if not response.get("success"):
            error = str(response.get("error") or "Unknown error")
            self._logger.warning("profit_submission_rejected", error_message=error)
            self._emit_failed("backend_rejected", error, service=service, worker=worker)
            return SubmissionResult(success=False, error=error)

        try:
            stats = self._store.stats.with_submission(
                response.get("total_amount"),
                response.get("profits_count"),
            )
        except (TypeError, ValueError) as e:
            # accepted but unreadable totals: take them from the reload instead
            self._logger.warning(
                "profit_submission_totals_malformed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            stats = None
        else:
            self._store.replace_stats(stats)
        await self._feed.load_initial()
        if stats is None:
            stats = self._store.stats

        telegram_info = response.get("telegram_info") or None
        self._logger.info(
            "profit_submitted",
            amount=str(amount),
            total_amount=str(stats.total_amount),
            profits_count=stats.record_count,
        )
        self._emit_submitted(amount, service, worker, percent, stats.total_amount, stats.record_count, telegram_info)
        return SubmissionResult(
            success=True,
            total_amount=stats.total_amount,
            profits_count=stats.record_count,
            telegram_info=telegram_info,
        )

    def _submit_local(
        self,
        amount: Decimal,
        percent: int,
        service: str,
        worker: str,
        *,
        now: datetime | None = None,
    ) -> SubmissionResult:
        dash = self._settings.dashboard
        record = ProfitRecord.create(
            amount=amount,
            service=service,
            worker=worker,
            date=now if now is not None else local_now(),
            worker_percent=percent,
            project_running_total=self._store.running_total() + amount,
            default_worker_percent=dash.default_worker_percent,
            unknown_service=dash.unknown_service,
            unknown_worker=dash.unknown_worker,
            now=now,
        )
        current = self._store.stats
        stats = current.with_submission(current.total_amount + amount, current.record_count + 1)
        self._store.append_submitted(record)
        self._store.replace_stats(stats)

        self._logger.info(
            "profit_submitted_locally",
            amount=str(amount),
            total_amount=str(stats.total_amount),
            profits_count=stats.record_count,
        )
        self._emit_submitted(amount, service, worker, percent, stats.total_amount, stats.record_count, None, demo=True)
        return SubmissionResult(
            success=True,
            total_amount=stats.total_amount,
            profits_count=stats.record_count,
            record=record,
        )

    def _emit_submitted(
        self,
        amount: Decimal,
        service: str,
        worker: str,
        percent: int,
        total_amount: Decimal,
        profits_count: int,
        telegram_info: Optional[str],
        *,
        demo: bool = False,
    ) -> None:
        """Emit ProfitSubmittedEvent for ProfitEventsNotifier."""
        if self._event_bus is None:
            return
        event = ProfitSubmittedEvent(
            amount=amount,
            service=service,
            worker=worker,
            worker_percent=percent,
            total_amount=total_amount,
            profits_count=profits_count,
            telegram_info=telegram_info,
            demo=demo,
        )
        self._event_bus.dispatch(event)

    def _emit_failed(
        self,
        reason: str,
        error_message: str,
        *,
        service: Optional[str] = None,
        worker: Optional[str] = None,
    ) -> None:
        """Emit ProfitSubmissionFailedEvent for ProfitEventsNotifier."""
        if self._event_bus is None:
            return
        event = ProfitSubmissionFailedEvent(
            reason=reason,
            error_message=error_message,
            service=service,
            worker=worker,
        )
        self._event_bus.dispatch(event)
