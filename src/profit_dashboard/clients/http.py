# -*- coding: utf-8 -*-
"""Async HTTP client with retries and rate-limit handling."""

from __future__ import annotations

import asyncio
import random
import uuid
from typing import Any, Callable, Dict, Literal, Optional

import aiohttp
import structlog
from structlog.contextvars import bound_contextvars

from profit_dashboard.config import Settings
from profit_dashboard.exceptions import DashboardAPIError, RateLimitError

HttpMethod = Literal["GET", "POST"]


class _RateLimited(Exception):
    """One attempt answered 429."""

    def __init__(self, retry_after: Optional[float]) -> None:
        super().__init__("HTTP 429")
        self.retry_after = retry_after


def _status_of(error: Optional[BaseException]) -> Optional[int]:
    if isinstance(error, aiohttp.ClientResponseError):
        return error.status
    return None


class AsyncHttpClient:
    """JSON-over-HTTP client for the profit backend.

    GET requests are attempted up to settings.api.max_retries times. POST
    requests are sent once unless the caller asks for more attempts, since a
    profit submission is not idempotent. A 429 waits for Retry-After when the
    server sends one.

    The aiohttp session is created lazily unless one is injected; an owned
    session is closed by aclose() or on leaving the async context manager.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.api.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter, capped at 4 seconds."""
        base = min(4.0, 0.25 * (2**attempt))
        return base + random.uniform(0.0, 0.15)

    @staticmethod
    def _retry_after(response: aiohttp.ClientResponse) -> Optional[float]:
        header = response.headers.get("Retry-After")
        if not header:
            return None
        try:
            return float(header)
        except ValueError:
            return None

    async def get(self, url: str, *, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET url and return the decoded JSON body.

        Raises:
            RateLimitError: If every attempt was answered with 429.
            DashboardAPIError: If the last attempt failed otherwise.
        """
        return await self._request("GET", url, attempts=self._settings.api.max_retries, params=params or {})

    async def post(
        self,
        url: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        attempts: int = 1,
    ) -> Any:
        """POST a JSON body and return the decoded JSON response.

        Args:
            url: Full URL to request.
            json: JSON-serializable body.
            attempts: Number of attempts; raise it only for idempotent endpoints.

        Raises:
            RateLimitError: If every attempt was answered with 429.
            DashboardAPIError: If the last attempt failed otherwise.
        """
        return await self._request("POST", url, attempts=max(1, attempts), json=json or {})

    async def _attempt(
        self,
        method: HttpMethod,
        url: str,
        params: Optional[Dict[str, Any]],
        json: Optional[Dict[str, Any]],
    ) -> Any:
        session = await self._get_session()
        async with session.request(method, url, params=params, json=json) as response:
            if response.status == 429:
                raise _RateLimited(self._retry_after(response))
            response.raise_for_status()
            # the backend does not always label JSON bodies
            return await response.json(content_type=None)

    async def _request(
        self,
        method: HttpMethod,
        url: str,
        *,
        attempts: int,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        event = f"http_{method.lower()}"
        last_error: Optional[Exception] = None

        with bound_contextvars(
            http_method=method,
            http_url=url,
            http_request_id=uuid.uuid4().hex[:12],
            http_max_attempts=attempts,
        ):
            for attempt in range(1, attempts + 1):
                try:
                    return await self._attempt(method, url, params, json)
                except _RateLimited as e:
                    last_error = e
                    self._logger.warning(
                        f"{event}_rate_limited",
                        http_attempt=attempt,
                        http_retry_after_seconds=e.retry_after,
                    )
                    delay = e.retry_after if e.retry_after and e.retry_after > 0 else self._backoff_delay(attempt - 1)
                except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                    # ValueError: body is not JSON
                    last_error = e
                    self._logger.debug(
                        f"{event}_retry",
                        http_attempt=attempt,
                        http_status_code=_status_of(e),
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                    delay = self._backoff_delay(attempt - 1)
                if attempt < attempts:
                    await asyncio.sleep(delay)

            raise self._failure(event, method, url, attempts, last_error) from last_error

    def _failure(
        self,
        event: str,
        method: HttpMethod,
        url: str,
        attempts: int,
        error: Optional[Exception],
    ) -> DashboardAPIError:
        if isinstance(error, _RateLimited):
            self._logger.error(f"{event}_rate_limit_exhausted", http_attempts=attempts)
            return RateLimitError(url=url, retry_after=error.retry_after)

        status_code = _status_of(error)
        self._logger.error(
            f"{event}_failed",
            http_attempts=attempts,
            http_status_code=status_code,
            error_type=type(error).__name__,
            error_message=str(error),
        )
        return DashboardAPIError(
            f"{method} failed after {attempts} attempt(s): {url}",
            url=url,
            status_code=status_code,
            cause=error,
        )
