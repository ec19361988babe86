"""Debouncer: run a coroutine only after input has been quiet for a delay."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, Optional

import structlog

DEFAULT_DELAY_SECONDS = 1.0


class Debouncer:
    """Cancellable delayed task; each schedule() replaces the pending one.

    Only the last call within the delay window runs. Must be used from a
    running event loop.
    """

    def __init__(
        self,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._delay = delay_seconds
        self._task: asyncio.Task[Any] | None = None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def delay_seconds(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """True while a scheduled call has not finished."""
        return self._task is not None and not self._task.done()

    def schedule(self, factory: Callable[[], Awaitable[Any]]) -> asyncio.Task[Any]:
        """Cancel the pending call and schedule factory() after the delay.

        Returns:
            The task; awaiting it yields factory's result, or raises
            CancelledError if a later schedule() or cancel() superseded it.
        """
        self.cancel()
        self._task = asyncio.create_task(self._run(factory))
        return self._task

    def cancel(self) -> None:
        """Cancel the pending call, if any."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            self._logger.debug("debouncer_cancelled")

    async def wait(self) -> Any:
        """Wait for the pending call and return its result (None if nothing is pending)."""
        task = self._task
        if task is None:
            return None
        return await task

    async def _run(self, factory: Callable[[], Awaitable[Any]]) -> Any:
        await asyncio.sleep(self._delay)
        return await factory()
