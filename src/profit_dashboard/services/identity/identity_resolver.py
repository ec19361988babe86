# -*- coding: utf-8 -*-
"""IdentityResolver: handle -> IdentityRecord, memoized for the session.

The identity provider exposes at most one user: the one running the session.
A handle that is not that user can only be given a fallback record built
from the handle itself. Resolution never fails; faults produce an
error-fallback record.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import parse_qs, unquote

import structlog
from pydantic import BaseModel, ConfigDict, ValidationError
from structlog.contextvars import bound_contextvars

from profit_dashboard.models.identity import IdentityRecord, IdentitySource

if TYPE_CHECKING:
    from profit_dashboard.config import Settings
    from profit_dashboard.persistence.repositories.interfaces.identity_cache_repository import (
        IIdentityCacheRepository,
    )

ContextProvider = Callable[[], Optional[str]]


class SessionUser(BaseModel):
    """The "user" object of the identity provider's init data."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None


def parse_session_user(init_data: str) -> Optional[SessionUser]:
    """Extract the session user from URL-encoded init data.

    Returns:
        The user, or None when init data carries no "user" field.

    Raises:
        ValueError: If the "user" field is not a valid user JSON object
            (pydantic.ValidationError is a ValueError).
    """
    params = parse_qs(init_data, keep_blank_values=True)
    values = params.get("user")
    if not values:
        return None
    return SessionUser.model_validate_json(unquote(values[0]))


def settings_context_provider(settings: Settings) -> ContextProvider:
    """Context provider reading the raw init data from DASHBOARD__IDENTITY_CONTEXT."""

    def provider() -> Optional[str]:
        return settings.dashboard.identity_context

    return provider


class IdentityResolver:
    """Resolves worker handles to identity records with a never-evicting cache."""

    def __init__(
        self,
        cache: IIdentityCacheRepository,
        context_provider: ContextProvider,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            cache: Identity cache repository (session scoped).
            context_provider: Returns the provider's raw init data, or None when
                no provider context is available.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._cache = cache
        self._context_provider = context_provider
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def resolve(self, handle: str) -> IdentityRecord:
        """Return the identity record for handle (no leading "@").

        A cached record is returned as is. Otherwise the record is built from
        the provider context and cached; if another resolution stored a record
        for the same handle first, that one is returned.
        """
        cached = await self._cache.get(handle)
        if cached is not None:
            return cached

        with bound_contextvars(identity_handle=handle):
            record = self._resolve_uncached(handle)
            stored = await self._cache.save_if_absent(record)
            self._logger.debug("identity_resolved", identity_source=stored.source.value)
            return stored

    def _resolve_uncached(self, handle: str) -> IdentityRecord:
        init_data = self._context_provider()
        if not init_data:
            return IdentityRecord.fallback(handle, IdentitySource.OFFLINE_FALLBACK)

        try:
            user = parse_session_user(init_data)
        except (ValidationError, ValueError, TypeError) as e:
            self._logger.warning(
                "identity_context_parse_failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return IdentityRecord.fallback(handle, IdentitySource.ERROR_FALLBACK)

        if user is None or user.username != handle:
            return IdentityRecord.fallback(handle, IdentitySource.NATIVE_FALLBACK)

        return IdentityRecord(
            handle=handle,
            first_name=user.first_name or handle,
            last_name=user.last_name or "",
            source=IdentitySource.NATIVE,
            id=user.id,
        )
