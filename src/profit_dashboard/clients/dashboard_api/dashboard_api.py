# -*- coding: utf-8 -*-
"""Profit backend API client (/api/data, /api/profits, /api/workers)."""

from __future__ import annotations

import structlog
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional, cast
from structlog.contextvars import bound_contextvars

from profit_dashboard.clients.dashboard_api.schema import (
    ProfitsPageSchema,
    ProjectDataSchema,
    SubmissionResponseSchema,
    WorkerRegistrationResponseSchema,
    WorkerSchema,
)
from profit_dashboard.config import Settings

if TYPE_CHECKING:
    from profit_dashboard.clients.http import AsyncHttpClient
    from profit_dashboard.models.identity import IdentityRecord


class DashboardApiClient:
    """Client for the profit backend consumed by the dashboard."""

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.api.base_url).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _url(self, path: str) -> str:
        return f"{self._settings.api.base_url.rstrip('/')}{path}"

    def _as_object(self, data: Any, event: str) -> dict[str, Any]:
        """Return data if it is a JSON object, else log and return an empty dict."""
        if isinstance(data, dict):
            return cast(dict[str, Any], data)
        self._logger.warning(event, dashboard_api_response_type=type(data).__name__)
        return {}

    async def get_project_data(self) -> ProjectDataSchema:
        """Fetch project totals and the newest profits (GET /api/data).

        Returns:
            Payload with total_amount, workers_count, profits_count and profits.
            Empty dict if the backend returned something other than an object.
        """
        data = await self._http.get(self._url("/api/data"))
        return cast(ProjectDataSchema, self._as_object(data, "dashboard_api_project_data_non_object"))

    async def get_profits(
        self,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> ProfitsPageSchema:
        """Fetch one page of profits (GET /api/profits).

        Args:
            limit: Page size. Omitted from the query when None.
            offset: Number of profits to skip. Omitted from the query when None.

        Returns:
            Payload with profits and has_more.
        """
        params: dict[str, Any] = {}
        if limit is not None:
            params["limit"] = max(0, limit)
        if offset is not None:
            params["offset"] = max(0, offset)
        with bound_contextvars(
            dashboard_api_limit=params.get("limit"),
            dashboard_api_offset=params.get("offset"),
        ):
            data = await self._http.get(self._url("/api/profits"), params=params)
            return cast(ProfitsPageSchema, self._as_object(data, "dashboard_api_profits_non_object"))

    async def submit_profit(
        self,
        *,
        amount: Decimal,
        worker_percent: int,
        service: str,
        worker_username: str,
        added_by: Optional[int] = None,
    ) -> SubmissionResponseSchema:
        """Record a new profit (POST /api/profits).

        Args:
            amount: Deposit amount (canonical, > 0).
            worker_percent: Worker share in percent.
            service: Service label.
            worker_username: Worker handle without "@".
            added_by: Identity id of the submitting user, if known.

        Returns:
            Payload with success and, on success, total_amount and profits_count.
        """
        body: dict[str, Any] = {
            "amount": float(amount),
            "worker_percent": worker_percent,
            "service": service,
            "worker_username": worker_username,
            "added_by": added_by,
            # identity is resolved client-side; the backend must not look it up again
            "auto_fetch_telegram": False,
        }
        with bound_contextvars(dashboard_api_service=service):
            data = await self._http.post(self._url("/api/profits"), json=body)
            return cast(
                SubmissionResponseSchema,
                self._as_object(data, "dashboard_api_submit_profit_non_object"),
            )

    async def get_workers(self) -> list[WorkerSchema]:
        """Fetch registered workers (GET /api/workers)."""
        data = self._as_object(
            await self._http.get(self._url("/api/workers")),
            "dashboard_api_workers_non_object",
        )
        workers = data.get("workers")
        if not isinstance(workers, list):
            return []
        return [cast(WorkerSchema, w) for w in cast(list[Any], workers) if isinstance(w, dict)]

    async def add_telegram_worker(self, identity: "IdentityRecord") -> WorkerRegistrationResponseSchema:
        """Register or update a worker from a resolved identity (POST /api/workers/add-telegram)."""
        body: dict[str, Any] = {
            "username": identity.handle,
            "telegram_id": identity.id,
            "first_name": identity.first_name,
            "last_name": identity.last_name,
            "source": identity.source.value,
        }
        with bound_contextvars(dashboard_api_identity_source=identity.source.value):
            data = await self._http.post(self._url("/api/workers/add-telegram"), json=body)
            return cast(
                WorkerRegistrationResponseSchema,
                self._as_object(data, "dashboard_api_add_worker_non_object"),
            )
