# -*- coding: utf-8 -*-
"""Event-based notification styler with emoji headings (Telegram HTML or plain text)."""

from __future__ import annotations

from typing import Any

from profit_dashboard.codec import format_grouped
from profit_dashboard.notifications.types import NotificationMessage

_TITLES = {
    "profit_submitted": ("💰", "New Profit"),
    "profit_submission_failed": ("❌", "Profit Not Added"),
    "dashboard_load_failed": ("⚠️", "Loading Failed"),
    "system_started": ("▶️", "Dashboard Started"),
    "system_stopped": ("⏹️", "Dashboard Stopped"),
}

_LEVEL_EMOJI = {
    "success": "✅",
    "warning": "⚠️",
    "error": "❌",
}


class EventNotificationStyler:
    """Render notifications by event_type with emoji headings and labelled rows."""

    def render(self, message: NotificationMessage, *, parse_html: bool = True) -> str:
        if message.event_type == "profit_submitted":
            body = self._render_profit(message, parse_html)
        else:
            body = self._render_generic(message, parse_html)
        return body.strip()

    def _render_profit(self, message: NotificationMessage, parse_html: bool) -> str:
        payload = message.payload or {}
        rows = [
            ("💵 Amount", self._amount(payload.get("amount"))),
            ("🏷️ Service", payload.get("service")),
            ("👤 Worker", f"@{payload['worker']}" if payload.get("worker") else None),
            ("📊 Share", f"{payload['worker_percent']}%" if payload.get("worker_percent") is not None else None),
            ("🏦 Project total", self._amount(payload.get("total_amount"))),
            ("🔢 Profits", payload.get("profits_count")),
        ]
        lines = [self._heading(message, parse_html), message.message]
        lines.extend(self._row(label, value, parse_html) for label, value in rows if value not in (None, ""))
        if payload.get("telegram_info"):
            lines.append(str(payload["telegram_info"]))
        return "\n".join(lines)

    def _render_generic(self, message: NotificationMessage, parse_html: bool) -> str:
        lines = [self._heading(message, parse_html), message.message]
        for key in sorted((message.payload or {}).keys()):
            value = (message.payload or {}).get(key)
            if value is not None:
                lines.append(self._row(key, value, parse_html))
        return "\n".join(lines)

    def _heading(self, message: NotificationMessage, parse_html: bool) -> str:
        emoji, title = _TITLES.get(
            message.event_type,
            (_LEVEL_EMOJI.get(message.level, "ℹ️"), message.event_type.replace("_", " ").title()),
        )
        if message.title:
            title = message.title
        return f"{emoji} <b>{title}</b>" if parse_html else f"{emoji} {title}"

    @staticmethod
    def _row(label: str, value: Any, parse_html: bool) -> str:
        return f"<b>{label}:</b> {value}" if parse_html else f"{label}: {value}"

    @staticmethod
    def _amount(value: Any) -> str | None:
        if value is None:
            return None
        return f"{format_grouped(value)} ₽"
