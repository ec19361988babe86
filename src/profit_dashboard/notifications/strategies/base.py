# -*- coding: utf-8 -*-
"""Base notification channel."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from profit_dashboard.notifications.types import NotificationLevel, NotificationMessage, level_at_least

if TYPE_CHECKING:  # pragma: no cover
    from profit_dashboard.config.config import Settings


class BaseNotificationStrategy(ABC):
    """Delivery channel used by NotificationService.

    A channel receives only messages at or above its min_level.
    """

    def __init__(self, settings: "Settings", *, min_level: NotificationLevel = "info") -> None:
        self.settings = settings
        self.min_level: NotificationLevel = min_level

    def accepts(self, message: NotificationMessage) -> bool:
        return level_at_least(message.level, self.min_level)

    @property
    @abstractmethod
    def is_running(self) -> bool: ...

    @abstractmethod
    async def initialize(self) -> None: ...

    @abstractmethod
    async def shutdown(self) -> None: ...

    @abstractmethod
    async def send_notification(self, message: NotificationMessage) -> None:
        """Deliver one message. Channel faults may raise; the service logs them."""
