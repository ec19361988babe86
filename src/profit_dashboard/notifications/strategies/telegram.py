# -*- coding: utf-8 -*-
"""Telegram notification channel (python-telegram-bot, async)."""

from __future__ import annotations

import asyncio
import time
from collections import deque
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars
from telegram import Bot
from telegram.constants import ParseMode
from telegram.error import BadRequest, Forbidden, RetryAfter, TelegramError
from telegram.request import HTTPXRequest

from profit_dashboard.exceptions import MissingRequiredConfigError
from profit_dashboard.notifications.strategies.base import BaseNotificationStrategy
from profit_dashboard.notifications.types import NotificationMessage

if TYPE_CHECKING:
    from profit_dashboard.config.config import Settings
    from profit_dashboard.notifications.types import NotificationStyler

_RATE_WINDOW_SECONDS = 60.0


def _seconds(value: Any) -> float:
    return value.total_seconds() if isinstance(value, timedelta) else float(value)


class TelegramNotifier(BaseNotificationStrategy):
    """Post notifications to one Telegram chat in HTML parse mode.

    Sends are spaced to stay under messages_per_minute. Flood-control replies
    are waited out, transport faults are retried with exponential backoff and
    messages Telegram rejects (BadRequest, Forbidden) are dropped.
    """

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        bot: Optional[Bot] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        cfg = settings.telegram
        if not cfg.api_key or not cfg.chat_id:
            raise MissingRequiredConfigError("TelegramNotifier requires TELEGRAM__API_KEY and TELEGRAM__CHAT_ID")
        super().__init__(settings, min_level=cfg.min_level)
        self._cfg = cfg
        self._styler = styler
        self._bot = bot
        self._owns_bot = bot is None
        self._opened = False
        self._recent_sends: deque[float] = deque()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def is_running(self) -> bool:
        return self._opened

    async def initialize(self) -> None:
        if self._opened:
            self._logger.warning("telegram_already_running")
            return
        if self._bot is None:
            request = HTTPXRequest(
                connect_timeout=self._cfg.connect_timeout,
                read_timeout=self._cfg.read_timeout,
                write_timeout=self._cfg.write_timeout,
                pool_timeout=self._cfg.pool_timeout,
            )
            self._bot = Bot(token=str(self._cfg.api_key), request=request)
        self._opened = True

    async def shutdown(self) -> None:
        if self._owns_bot:
            self._bot = None
        self._opened = False

    async def send_notification(self, message: NotificationMessage) -> None:
        bot = self._bot
        if not self._opened or bot is None:
            self._logger.warning("telegram_not_running_cannot_send")
            return
        text = self._fit(self._styler.render(message, parse_html=True))
        with bound_contextvars(notification_event_type=message.event_type):
            if await self._deliver(bot, text):
                self._recent_sends.append(time.monotonic())

    def _fit(self, text: str) -> str:
        """Drop trailing lines until text fits max_message_length (tags stay balanced per line)."""
        limit = self._cfg.max_message_length
        if len(text) <= limit:
            return text
        lines = text.splitlines()
        while lines and len("\n".join(lines)) + 2 > limit:
            lines.pop()
        if not lines:
            return text[: limit - 1] + "…"
        return "\n".join(lines) + "\n…"

    def _backoff(self, attempt: int) -> float:
        return min(60.0, self._cfg.backoff_base_seconds * (2 ** (attempt - 1)))

    async def _deliver(self, bot: Bot, text: str) -> bool:
        await self._wait_for_slot()
        attempts = max(1, self._cfg.max_retries)
        for attempt in range(1, attempts + 1):
            try:
                await bot.send_message(chat_id=str(self._cfg.chat_id), text=text, parse_mode=ParseMode.HTML)
                return True
            except RetryAfter as exc:
                delay = _seconds(exc.retry_after)
                self._logger.warning("telegram_flood_control_wait", retry_seconds=delay, attempt=attempt)
                await asyncio.sleep(delay)
            except (BadRequest, Forbidden) as exc:
                self._logger.error(
                    "telegram_message_rejected",
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                )
                return False
            except TelegramError as exc:
                backoff = self._backoff(attempt)
                self._logger.warning(
                    "telegram_send_retry",
                    error_type=type(exc).__name__,
                    attempt=attempt,
                    max_attempts=attempts,
                    backoff_seconds=backoff,
                )
                await asyncio.sleep(backoff)

        self._logger.error("telegram_message_dropped", attempts=attempts)
        return False

    async def _wait_for_slot(self) -> None:
        now = time.monotonic()
        while self._recent_sends and self._recent_sends[0] <= now - _RATE_WINDOW_SECONDS:
            self._recent_sends.popleft()
        if len(self._recent_sends) >= self._cfg.messages_per_minute:
            wait = _RATE_WINDOW_SECONDS - (now - self._recent_sends[0])
            self._logger.debug("telegram_rate_limit_wait", wait_seconds=round(wait, 2))
            await asyncio.sleep(wait)
