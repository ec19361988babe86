# -*- coding: utf-8 -*-
"""Unit tests for NotificationService and the console channel."""

from __future__ import annotations

import io

import pytest

from profit_dashboard.config import Settings
from profit_dashboard.exceptions import MissingRequiredConfigError
from profit_dashboard.notifications import (
    ConsoleNotifier,
    EventNotificationStyler,
    NotificationMessage,
    NotificationService,
    TelegramNotifier,
)
from profit_dashboard.notifications.strategies import BaseNotificationStrategy


class _RecordingNotifier(BaseNotificationStrategy):
    def __init__(self, settings: Settings, *, fail: bool = False, min_level: str = "info") -> None:
        super().__init__(settings, min_level=min_level)  # type: ignore[arg-type]
        self.fail = fail
        self.sent: list[NotificationMessage] = []
        self.running = False

    @property
    def is_running(self) -> bool:
        return self.running

    async def initialize(self) -> None:
        self.running = True

    async def shutdown(self) -> None:
        self.running = False

    async def send_notification(self, message: NotificationMessage) -> None:
        if self.fail:
            raise RuntimeError("channel down")
        self.sent.append(message)


async def test_queued_messages_are_delivered_before_shutdown(settings: Settings) -> None:
    failing = _RecordingNotifier(settings, fail=True)
    recording = _RecordingNotifier(settings)
    service = NotificationService(notifiers=[failing, recording])
    await service.initialize()

    service.notify(NotificationMessage(event_type="a", message="one", level="success"))
    service.notify(NotificationMessage(event_type="b", message="two", level="error"))
    await service.shutdown()

    assert [m.message for m in recording.sent] == ["one", "two"]
    assert recording.is_running is False
    assert service.is_running is False


async def test_newer_message_of_same_level_supersedes_queued_one(settings: Settings) -> None:
    recording = _RecordingNotifier(settings)
    service = NotificationService(notifiers=[recording])
    await service.initialize()

    service.notify(NotificationMessage(event_type="dashboard_load_failed", message="first", level="error"))
    service.notify(NotificationMessage(event_type="profit_submitted", message="added", level="success"))
    service.notify(NotificationMessage(event_type="dashboard_load_failed", message="second", level="error"))
    await service.shutdown()

    assert [m.message for m in recording.sent] == ["added", "second"]
    assert service.superseded_count == 1


async def test_supersession_can_be_disabled(settings: Settings) -> None:
    recording = _RecordingNotifier(settings)
    service = NotificationService(notifiers=[recording], supersede_same_level=False)
    await service.initialize()

    service.notify(NotificationMessage(event_type="a", message="one"))
    service.notify(NotificationMessage(event_type="a", message="two"))
    await service.shutdown()

    assert [m.message for m in recording.sent] == ["one", "two"]


async def test_channel_min_level_filters_messages(settings: Settings) -> None:
    errors_only = _RecordingNotifier(settings, min_level="warning")
    service = NotificationService(notifiers=[errors_only])
    await service.initialize()

    service.notify(NotificationMessage(event_type="a", message="info"))
    service.notify(NotificationMessage(event_type="a", message="bad", level="error"))
    await service.shutdown()

    assert [m.message for m in errors_only.sent] == ["bad"]


async def test_full_queue_drops_message(settings: Settings) -> None:
    recording = _RecordingNotifier(settings)
    service = NotificationService(notifiers=[recording], queue_size=1)
    await service.initialize()

    service.notify(NotificationMessage(event_type="a", message="kept"))
    service.notify(NotificationMessage(event_type="a", message="dropped"))
    await service.shutdown()

    assert [m.message for m in recording.sent] == ["kept"]
    assert service.superseded_count == 0


async def test_notify_without_notifiers_is_a_no_op() -> None:
    service = NotificationService(notifiers=[])
    await service.initialize()

    service.notify(NotificationMessage(event_type="a", message="ignored"))

    assert service.is_running is False


def test_notify_before_initialize_raises(settings: Settings) -> None:
    service = NotificationService(notifiers=[_RecordingNotifier(settings)])

    with pytest.raises(RuntimeError):
        service.notify(NotificationMessage(event_type="a", message="x"))


async def test_console_notifier_prints_plain_text(settings: Settings) -> None:
    stream = io.StringIO()
    notifier = ConsoleNotifier(settings, EventNotificationStyler(), stream=stream)
    await notifier.initialize()

    await notifier.send_notification(NotificationMessage(event_type="system_started", message="up"))

    assert stream.getvalue() == "▶️ Dashboard Started\nup\n\n"


async def test_closed_console_notifier_is_silent(capsys: pytest.CaptureFixture[str], settings: Settings) -> None:
    notifier = ConsoleNotifier(settings, EventNotificationStyler())

    await notifier.send_notification(NotificationMessage(event_type="system_started", message="up"))

    assert capsys.readouterr().out == ""


def test_console_min_level_comes_from_settings() -> None:
    settings = Settings.from_env(console={"enabled": True, "min_level": "error"})
    notifier = ConsoleNotifier(settings, EventNotificationStyler())

    assert notifier.accepts(NotificationMessage(event_type="a", message="x", level="error")) is True
    assert notifier.accepts(NotificationMessage(event_type="a", message="x", level="success")) is False


def test_telegram_notifier_requires_credentials() -> None:
    settings = Settings.from_env(telegram={"enabled": True, "api_key": None, "chat_id": None})

    with pytest.raises(MissingRequiredConfigError):
        TelegramNotifier(settings, EventNotificationStyler())
