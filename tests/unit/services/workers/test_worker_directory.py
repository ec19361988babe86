# -*- coding: utf-8 -*-
"""Unit tests for WorkerDirectoryService and initials."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

import pytest

from profit_dashboard.config import Settings
from profit_dashboard.events.profits import DashboardLoadFailedEvent
from profit_dashboard.exceptions import DashboardAPIError
from profit_dashboard.services.aggregation import AggregationService
from profit_dashboard.services.workers import WorkerDirectoryService, initials


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        (None, "?"),
        ("", "?"),
        ("@alice", "AL"),
        ("Ivan Petrov", "IP"),
        ("anna maria lopez", "AM"),
        ("x", "X"),
    ],
)
def test_initials(name: str | None, expected: str) -> None:
    assert initials(name) == expected


async def test_load_joins_workers_with_profit_totals(
    settings: Settings,
    raw_profit_factory: Callable[..., dict[str, Any]],
) -> None:
    api = SimpleNamespace(
        get_workers=AsyncMock(
            return_value=[
                {"username": "alice", "name": "Alice Smith", "telegram_id": "1001", "register_date": "2025-08-01"},
                {"username": "bob", "telegram_id": " "},
                {"name": "no handle"},
            ]
        ),
        get_profits=AsyncMock(
            return_value={
                "profits": [
                    raw_profit_factory(0, worker_name="@alice", amount=1000),
                    raw_profit_factory(1, worker_name="alice", amount=500),
                    raw_profit_factory(2, worker_name="carol", amount=10),
                    "garbage",
                ]
            }
        ),
    )
    service = WorkerDirectoryService(api, AggregationService(), settings)

    alice, bob = await service.load()

    assert alice.display_name == "Alice Smith"
    assert alice.initials == "AS"
    assert alice.active is True
    assert (alice.count, alice.total_amount) == (2, Decimal("1500"))
    assert alice.register_date == "2025-08-01"
    assert bob.display_name == "bob"
    assert bob.active is False
    assert (bob.count, bob.total_amount) == (0, Decimal("0"))


async def test_load_matches_handles_stored_with_at_sign(
    settings: Settings,
    raw_profit_factory: Callable[..., dict[str, Any]],
) -> None:
    api = SimpleNamespace(
        get_workers=AsyncMock(return_value=[{"username": "@alice", "telegram_id": "1001"}]),
        get_profits=AsyncMock(
            return_value={"profits": [raw_profit_factory(0, worker_name="alice", amount=700)]}
        ),
    )
    service = WorkerDirectoryService(api, AggregationService(), settings)

    (alice,) = await service.load()

    assert alice.handle == "@alice"
    assert (alice.count, alice.total_amount) == (1, Decimal("700"))


async def test_load_failure_returns_empty_and_emits_event(settings: Settings, event_bus: Any) -> None:
    api = SimpleNamespace(
        get_workers=AsyncMock(side_effect=DashboardAPIError("down")),
        get_profits=AsyncMock(return_value={"profits": []}),
    )
    service = WorkerDirectoryService(api, AggregationService(), settings, event_bus=event_bus)

    assert await service.load() == []
    events = event_bus.of_type(DashboardLoadFailedEvent)
    assert [e.operation for e in events] == ["workers"]
