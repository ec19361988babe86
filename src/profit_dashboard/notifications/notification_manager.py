"""NotificationService: delivers dashboard notifications to the configured channels.

Messages are queued by notify() and delivered by one background task, so
callers never wait on a channel. Like on-screen toasts, a newer message of the
same level supersedes one of that level still waiting in the queue.
"""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from profit_dashboard.notifications.strategies import BaseNotificationStrategy
from profit_dashboard.notifications.types import NotificationMessage

_Queued = tuple[int, NotificationMessage]


@dataclass
class NotificationService:
    """Fan-out of NotificationMessages to channels, filtered by each channel's min_level."""

    notifiers: list[BaseNotificationStrategy]
    queue_size: int = 100
    supersede_same_level: bool = True
    get_logger: Callable[[str], Any] = field(default=structlog.get_logger)
    _queue: asyncio.Queue[_Queued] | None = field(init=False, default=None)
    _delivery_task: asyncio.Task[None] | None = field(init=False, default=None)
    _sequence: itertools.count[int] = field(init=False, default_factory=itertools.count)
    _latest_by_level: dict[str, int] = field(init=False, default_factory=dict)
    _superseded: int = field(init=False, default=0)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        self._logger = self.get_logger("NotificationService")

    @property
    def is_running(self) -> bool:
        return self._queue is not None

    @property
    def superseded_count(self) -> int:
        """Messages skipped because a newer one of the same level was queued."""
        return self._superseded

    async def initialize(self) -> None:
        """Open every channel and start delivery. Without channels notify() is a no-op."""
        if self._queue is not None:
            self._logger.warning("notification_already_running")
            return
        for notifier in self.notifiers:
            await notifier.initialize()
        if not self.notifiers:
            self._logger.info("notification_init_no_notifiers")
            return
        queue: asyncio.Queue[_Queued] = asyncio.Queue(maxsize=self.queue_size)
        self._queue = queue
        self._delivery_task = asyncio.create_task(self._deliver_loop(queue), name="notification-delivery")
        self._logger.debug(
            "notification_init_complete",
            notification_channels=[type(n).__name__ for n in self.notifiers],
            notification_queue_size=self.queue_size,
        )

    async def shutdown(self) -> None:
        """Deliver what is queued, stop delivery and close every channel."""
        queue, self._queue = self._queue, None
        if queue is not None:
            queue.shutdown()
            await queue.join()
        task, self._delivery_task = self._delivery_task, None
        if task is not None:
            await task
        self._latest_by_level.clear()

        for notifier in self.notifiers:
            await notifier.shutdown()
        self._logger.debug("notification_shutdown_complete", notification_superseded=self._superseded)

    def notify(self, message: NotificationMessage) -> None:
        """Queue message for delivery. Dropped (with a warning) when the queue is full.

        Raises:
            RuntimeError: If channels are configured but initialize() was not awaited.
        """
        queue = self._queue
        if queue is None:
            if not self.notifiers:
                return
            raise RuntimeError("NotificationService not initialized")
        seq = next(self._sequence)
        try:
            queue.put_nowait((seq, message))
        except asyncio.QueueFull:
            self._logger.warning(
                "notification_queue_full_dropped",
                notification_event_type=message.event_type,
            )
            return
        self._latest_by_level[message.level] = seq

    def _is_superseded(self, seq: int, message: NotificationMessage) -> bool:
        return self.supersede_same_level and self._latest_by_level.get(message.level, seq) > seq

    async def _deliver_loop(self, queue: asyncio.Queue[_Queued]) -> None:
        while True:
            try:
                seq, message = await queue.get()
            except asyncio.QueueShutDown:
                break
            try:
                if self._is_superseded(seq, message):
                    self._superseded += 1
                    self._logger.debug(
                        "notification_superseded",
                        notification_event_type=message.event_type,
                        notification_level=message.level,
                    )
                    continue
                await self._dispatch(message)
            finally:
                queue.task_done()

    async def _dispatch(self, message: NotificationMessage) -> None:
        for notifier in self.notifiers:
            if not notifier.accepts(message):
                continue
            try:
                await notifier.send_notification(message)
            except Exception as e:
                self._logger.exception(
                    "notification_channel_failed",
                    notification_channel=type(notifier).__name__,
                    notification_event_type=message.event_type,
                    error_type=type(e).__name__,
                )
