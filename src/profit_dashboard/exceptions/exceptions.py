"""Custom exceptions for the profit backend and dashboard state."""

from __future__ import annotations


class DashboardError(Exception):
    """Base exception for profit-dashboard errors."""

    pass


class MissingRequiredConfigError(DashboardError):
    """Raised when a required configuration value is missing."""

    pass


class DashboardAPIError(DashboardError):
    """Raised when a profit backend request fails after retries."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RateLimitError(DashboardAPIError):
    """Raised when the API returns HTTP 429 (Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded (429)",
        *,
        url: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after


class PaginationExhaustedError(DashboardError):
    """Raised when a next page is requested after the backend reported no more.

    This is a caller bug: the "load more" trigger must be disabled once
    has_more is False.
    """

    def __init__(self, page_cursor: int) -> None:
        super().__init__(f"no more pages to load (page_cursor={page_cursor})")
        self.page_cursor = page_cursor
