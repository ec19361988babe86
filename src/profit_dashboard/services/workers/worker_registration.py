# -*- coding: utf-8 -*-
"""WorkerRegistrationService: resolve a worker handle and register it with the backend."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

import structlog
from structlog.contextvars import bound_contextvars

from profit_dashboard.exceptions import DashboardAPIError
from profit_dashboard.utils.validation import strip_handle

if TYPE_CHECKING:
    from profit_dashboard.clients.dashboard_api import (
        DashboardApiClient,
        WorkerRegistrationResponseSchema,
    )
    from profit_dashboard.models.identity import IdentityRecord
    from profit_dashboard.services.identity import Debouncer, IdentityResolver


@dataclass(frozen=True)
class WorkerRegistrationResult:
    """Outcome of a registration: backend payload, resolved identity or an error."""

    success: bool
    data: WorkerRegistrationResponseSchema | None = None
    identity: IdentityRecord | None = None
    error: str | None = None

    @property
    def action(self) -> str | None:
        """Backend action: added, updated, no_changes or found_existing."""
        if not self.data:
            return None
        return self.data.get("action")


class WorkerRegistrationService:
    """Registers workers typed into the submission form."""

    def __init__(
        self,
        api: DashboardApiClient,
        resolver: IdentityResolver,
        debouncer: Debouncer,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._api = api
        self._resolver = resolver
        self._debouncer = debouncer
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def register(self, handle: str) -> WorkerRegistrationResult:
        """Resolve handle and POST it to /api/workers/add-telegram. Never raises for API faults."""
        clean = strip_handle(handle)
        if not clean:
            return WorkerRegistrationResult(success=False, error="Username is required")

        identity = await self._resolver.resolve(clean)
        with bound_contextvars(worker=clean, identity_source=identity.source.value):
            try:
                data = await self._api.add_telegram_worker(identity)
            except DashboardAPIError as e:
                self._logger.error(
                    "worker_registration_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                    status_code=e.status_code,
                )
                return WorkerRegistrationResult(success=False, identity=identity, error=str(e))

            if data.get("error"):
                error = str(data["error"])
                self._logger.warning("worker_registration_rejected", error_message=error)
                return WorkerRegistrationResult(success=False, data=data, identity=identity, error=error)

            self._logger.info("worker_registered", worker_action=data.get("action"))
            return WorkerRegistrationResult(success=True, data=data, identity=identity)

    def on_handle_input(self, text: str) -> Optional[asyncio.Task[WorkerRegistrationResult]]:
        """Debounced registration for handle input; empty input cancels the pending one."""
        clean = strip_handle(text)
        if not clean:
            self._debouncer.cancel()
            return None
        return self._debouncer.schedule(lambda: self.register(clean))
