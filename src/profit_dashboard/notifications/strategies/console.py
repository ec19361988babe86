# -*- coding: utf-8 -*-
"""Console notifier: plain-text toasts on a text stream."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Optional, TextIO

from profit_dashboard.notifications.strategies.base import BaseNotificationStrategy
from profit_dashboard.notifications.types import NotificationMessage

if TYPE_CHECKING:  # pragma: no cover
    from profit_dashboard.config import Settings
    from profit_dashboard.notifications.types import NotificationStyler


class ConsoleNotifier(BaseNotificationStrategy):
    """Print each notification, followed by a blank line, to stream (stdout by default)."""

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        stream: Optional[TextIO] = None,
    ) -> None:
        super().__init__(settings, min_level=settings.console.min_level)
        self._styler = styler
        self._stream = stream
        self._opened = False

    @property
    def is_running(self) -> bool:
        return self._opened

    async def initialize(self) -> None:
        self._opened = True

    async def shutdown(self) -> None:
        self._opened = False

    async def send_notification(self, message: NotificationMessage) -> None:
        if not self._opened:
            return
        text = self._styler.render(message, parse_html=False)
        print(text, end="\n\n", file=self._stream or sys.stdout, flush=True)
