# -*- coding: utf-8 -*-
"""Unit tests for ProfitFeedService."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

from profit_dashboard.config import Settings
from profit_dashboard.events.profits import DashboardLoadFailedEvent
from profit_dashboard.exceptions import DashboardAPIError
from profit_dashboard.models.aggregate_stats import AggregateStats
from profit_dashboard.services.records import ProfitFeedService, RecordStore


def _api(**methods: Any) -> Any:
    return SimpleNamespace(
        get_project_data=methods.get("get_project_data", AsyncMock(return_value={})),
        get_profits=methods.get("get_profits", AsyncMock(return_value={"profits": [], "has_more": False})),
    )


def _project_data(factory: Callable[..., dict[str, Any]], count: int) -> dict[str, Any]:
    return {
        "total_amount": 34463,
        "workers_count": 6,
        "profits_count": 156,
        "profits": [factory(i) for i in range(count)],
    }


async def test_load_initial_fills_store(
    settings: Settings,
    raw_profit_factory: Callable[..., dict[str, Any]],
) -> None:
    api = _api(get_project_data=AsyncMock(return_value=_project_data(raw_profit_factory, 6)))
    store = RecordStore(settings)
    feed = ProfitFeedService(api, store, settings)

    records = await feed.load_initial()

    assert len(records) == 5
    assert store.has_more is True
    assert store.stats.record_count == 156


async def test_load_initial_failure_clears_store_and_emits_event(
    settings: Settings,
    raw_profit_factory: Callable[..., dict[str, Any]],
    event_bus: Any,
) -> None:
    store = RecordStore(settings)
    store.load_initial_page([raw_profit_factory(0)], {"profits_count": 3})
    api = _api(get_project_data=AsyncMock(side_effect=DashboardAPIError("down", status_code=502)))
    feed = ProfitFeedService(api, store, settings, event_bus=event_bus)

    assert await feed.load_initial() == []

    assert store.records == ()
    assert store.stats == AggregateStats.zero()
    assert store.has_more is False
    events = event_bus.of_type(DashboardLoadFailedEvent)
    assert len(events) == 1
    assert events[0].operation == "initial_page"


async def test_load_next_requests_offset_from_cursor(
    settings: Settings,
    raw_profit_factory: Callable[..., dict[str, Any]],
) -> None:
    get_profits = AsyncMock(
        return_value={"profits": [raw_profit_factory(i) for i in range(5, 10)], "has_more": True}
    )
    api = _api(
        get_project_data=AsyncMock(return_value=_project_data(raw_profit_factory, 6)),
        get_profits=get_profits,
    )
    store = RecordStore(settings)
    feed = ProfitFeedService(api, store, settings)
    await feed.load_initial()

    await feed.load_next()
    await feed.load_next()

    assert [c.kwargs for c in get_profits.await_args_list] == [
        {"limit": 5, "offset": 5},
        {"limit": 5, "offset": 10},
    ]
    assert store.page_cursor == 3
    assert len(store) == 15


async def test_load_next_does_nothing_when_exhausted(settings: Settings) -> None:
    api = _api()
    store = RecordStore(settings)
    feed = ProfitFeedService(api, store, settings)
    await feed.load_initial()

    assert await feed.load_next() == []
    api.get_profits.assert_not_awaited()


async def test_load_next_failure_closes_pagination(
    settings: Settings,
    raw_profit_factory: Callable[..., dict[str, Any]],
    event_bus: Any,
) -> None:
    api = _api(
        get_project_data=AsyncMock(return_value=_project_data(raw_profit_factory, 6)),
        get_profits=AsyncMock(side_effect=DashboardAPIError("timeout")),
    )
    store = RecordStore(settings)
    feed = ProfitFeedService(api, store, settings, event_bus=event_bus)
    await feed.load_initial()

    assert await feed.load_next() == []

    assert len(store) == 5
    assert store.has_more is False
    assert [e.operation for e in event_bus.of_type(DashboardLoadFailedEvent)] == ["next_page"]


async def test_refresh_resets_before_loading(
    settings: Settings,
    raw_profit_factory: Callable[..., dict[str, Any]],
) -> None:
    api = _api(get_project_data=AsyncMock(return_value=_project_data(raw_profit_factory, 2)))
    store = RecordStore(settings)
    feed = ProfitFeedService(api, store, settings)
    await feed.load_initial()

    records = await feed.refresh()

    assert len(records) == 2
    assert store.page_cursor == 1
    assert api.get_project_data.await_count == 2


async def test_demo_mode_serves_demo_data_without_backend(
    settings_factory: Callable[..., Settings],
) -> None:
    settings = settings_factory(demo_mode=True)
    api = _api()
    store = RecordStore(settings)
    feed = ProfitFeedService(api, store, settings)

    records = await feed.load_initial()
    assert await feed.load_next() == []

    assert [r.service for r in records] == ["MarketPlace", "BankApp", "CryptoEx", "FiatGate", "WalletPay"]
    assert store.stats.total_amount == Decimal("34463")
    assert store.has_more is False
    api.get_project_data.assert_not_awaited()


async def test_fetch_statistics_does_not_touch_store(
    settings: Settings,
    raw_profit_factory: Callable[..., dict[str, Any]],
) -> None:
    api = _api(get_project_data=AsyncMock(return_value=_project_data(raw_profit_factory, 8)))
    store = RecordStore(settings)
    feed = ProfitFeedService(api, store, settings)

    stats, records = await feed.fetch_statistics()

    assert stats.worker_count == 6
    assert len(records) == 8
    assert store.records == ()


async def test_fetch_statistics_failure_returns_zero(
    settings: Settings,
    event_bus: Any,
) -> None:
    api = _api(get_project_data=AsyncMock(side_effect=DashboardAPIError("down")))
    feed = ProfitFeedService(api, RecordStore(settings), settings, event_bus=event_bus)

    stats, records = await feed.fetch_statistics()

    assert stats == AggregateStats.zero()
    assert records == []
    assert [e.operation for e in event_bus.of_type(DashboardLoadFailedEvent)] == ["statistics"]
