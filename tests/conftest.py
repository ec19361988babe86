# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

import pytest

from profit_dashboard.config import Settings
from profit_dashboard.models.profit_record import ProfitRecord


class FakeEventBus:
    """Minimal event bus fake: records dispatched events and registered handlers."""

    def __init__(self) -> None:
        self.handlers: dict[str, list[Any]] = {}
        self.dispatched: list[Any] = []

    def on(self, event_type: type[Any], handler: Any) -> None:
        self.handlers.setdefault(event_type.__name__, []).append(handler)

    def dispatch(self, event: Any) -> None:
        self.dispatched.append(event)

    def of_type(self, event_type: type[Any]) -> list[Any]:
        return [e for e in self.dispatched if isinstance(e, event_type)]


@pytest.fixture
def D() -> Callable[[Any], Decimal]:
    """Decimal helper: D('1.23') -> Decimal('1.23')."""
    return lambda value: Decimal(str(value))


@pytest.fixture
def local_tz() -> timezone:
    """Fixed non-UTC zone so day-boundary tests do not depend on the host."""
    return timezone(timedelta(hours=3))


@pytest.fixture
def now_local(local_tz: timezone) -> datetime:
    """Stable local timestamp for deterministic assertions."""
    return datetime(2025, 8, 19, 12, 0, 0, tzinfo=local_tz)


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    """Build Settings with dashboard/api overrides, e.g. settings_factory(page_size=2)."""

    def _build(**dashboard: Any) -> Settings:
        base: dict[str, Any] = {
            "page_size": 5,
            "demo_mode": False,
            "identity_context": None,
            "load_all_pages": False,
        }
        base.update(dashboard)
        return Settings.from_env(
            dashboard=base,
            api={"base_url": "http://backend.test", "max_retries": 2, "timeout_seconds": 5.0},
            console={"enabled": False},
            telegram={"enabled": False},
        )

    return _build


@pytest.fixture
def settings(settings_factory: Callable[..., Settings]) -> Settings:
    return settings_factory()


@pytest.fixture
def event_bus() -> FakeEventBus:
    return FakeEventBus()


@pytest.fixture
def raw_profit_factory() -> Callable[..., dict[str, Any]]:
    """Build a backend profit item (GET /api/data, /api/profits) with overrides."""

    def _build(index: int = 0, **overrides: Any) -> dict[str, Any]:
        item: dict[str, Any] = {
            "amount": 1000 + index,
            "worker_percent": 70,
            "service": f"Service{index}",
            "worker_name": f"@worker{index}",
            "date": f"2025-08-{10 + (index % 9):02d}T10:00:00+03:00",
            "project_amount": 50000 + index,
        }
        item.update(overrides)
        return item

    return _build


@pytest.fixture
def profit_record_factory(
    now_local: datetime,
    D: Callable[[Any], Decimal],
) -> Callable[..., ProfitRecord]:
    """Build a ProfitRecord with sensible defaults and easy overrides."""

    def _build(**overrides: Any) -> ProfitRecord:
        return ProfitRecord.create(
            amount=overrides.pop("amount", D("1000")),
            service=overrides.pop("service", "WalletPay"),
            worker=overrides.pop("worker", "alice"),
            date=overrides.pop("date", now_local),
            worker_percent=overrides.pop("worker_percent", 70),
            project_running_total=overrides.pop("project_running_total", D("0")),
            now=now_local,
        )

    return _build
