"""Notification message types and level ordering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Protocol

NotificationLevel = Literal["info", "success", "warning", "error"]

LEVEL_RANK: dict[str, int] = {"info": 0, "success": 1, "warning": 2, "error": 3}


def level_at_least(level: str, minimum: str) -> bool:
    """True if level ranks at or above minimum (unknown levels rank as info)."""
    return LEVEL_RANK.get(level, 0) >= LEVEL_RANK.get(minimum, 0)


@dataclass(frozen=True)
class NotificationMessage:
    """A user-facing dashboard notification.

    event_type selects the heading and layout (profit_submitted,
    profit_submission_failed, dashboard_load_failed, system_started, ...);
    level drives channel filtering and supersession in NotificationService.
    """

    event_type: str
    message: str
    level: NotificationLevel = "info"
    title: str | None = None
    payload: dict[str, Any] | None = None


class NotificationStyler(Protocol):
    def render(self, message: NotificationMessage, *, parse_html: bool = True) -> str:
        """Return message as Telegram HTML (parse_html=True) or plain text."""
        ...
