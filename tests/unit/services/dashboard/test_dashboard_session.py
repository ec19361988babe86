# -*- coding: utf-8 -*-
"""Unit tests for DashboardSession."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, call

from profit_dashboard.config import Settings
from profit_dashboard.exceptions import DashboardAPIError
from profit_dashboard.services.aggregation import AggregationService
from profit_dashboard.services.dashboard import DashboardSession
from profit_dashboard.services.filtering import FilterKind, ProfitFilterPolicy
from profit_dashboard.services.records import ProfitFeedService, RecordStore


def _session(api: Any, settings: Settings) -> DashboardSession:
    feed = ProfitFeedService(api, RecordStore(settings), settings)
    return DashboardSession(feed, AggregationService(), ProfitFilterPolicy(), settings)


def _demo_session(settings_factory: Callable[..., Settings]) -> DashboardSession:
    api = SimpleNamespace(get_project_data=AsyncMock(), get_profits=AsyncMock())
    return _session(api, settings_factory(demo_mode=True))


def test_set_filter_parses_and_falls_back_to_all(settings: Settings) -> None:
    session = _session(SimpleNamespace(), settings)

    assert session.filter_kind is FilterKind.ALL
    assert session.set_filter("today") is FilterKind.TODAY
    assert session.set_filter(FilterKind.TOP) is FilterKind.TOP
    assert session.set_filter("yesterday") is FilterKind.ALL
    assert session.filter_kind is FilterKind.ALL


async def test_load_all_follows_pages_until_exhausted(
    settings_factory: Callable[..., Settings],
    raw_profit_factory: Callable[..., dict[str, Any]],
) -> None:
    settings = settings_factory(page_size=2)
    get_profits = AsyncMock(
        side_effect=[
            {"profits": [raw_profit_factory(2), raw_profit_factory(3)], "has_more": True},
            {"profits": [raw_profit_factory(4)], "has_more": False},
        ]
    )
    api = SimpleNamespace(
        get_project_data=AsyncMock(
            return_value={"profits": [raw_profit_factory(i) for i in range(3)], "profits_count": 5}
        ),
        get_profits=get_profits,
    )
    session = _session(api, settings)

    assert len(await session.refresh()) == 2
    assert session.has_more is True
    assert await session.load_all() == 3

    assert get_profits.await_args_list == [call(limit=2, offset=2), call(limit=2, offset=4)]
    assert len(session.store) == 5
    assert session.has_more is False
    assert await session.load_more() == []


async def test_load_all_stops_when_next_page_fails(
    settings_factory: Callable[..., Settings],
    raw_profit_factory: Callable[..., dict[str, Any]],
) -> None:
    settings = settings_factory(page_size=1)
    api = SimpleNamespace(
        get_project_data=AsyncMock(return_value={"profits": [raw_profit_factory(0), raw_profit_factory(1)]}),
        get_profits=AsyncMock(side_effect=DashboardAPIError("down")),
    )
    session = _session(api, settings)
    await session.refresh()

    assert await session.load_all() == 0
    assert session.has_more is False
    assert len(session.store) == 1


async def test_demo_statistics_report(settings_factory: Callable[..., Settings]) -> None:
    session = _demo_session(settings_factory)
    await session.refresh()

    report = session.statistics_report()

    assert report.total_text == "34.463"
    assert report.average_text == "220,917"
    assert report.average == Decimal("34463") / Decimal("156")
    assert [s.key for s in report.services] == [
        "BankApp",
        "FiatGate",
        "MarketPlace",
        "CryptoEx",
        "WalletPay",
    ]


async def test_load_statistics_leaves_store_untouched(settings_factory: Callable[..., Settings]) -> None:
    session = _demo_session(settings_factory)

    report = await session.load_statistics()

    assert report.stats.record_count == 156
    assert len(report.services) == 5
    assert len(session.store) == 0


async def test_statistics_report_without_records(settings: Settings) -> None:
    session = _session(SimpleNamespace(), settings)

    report = session.statistics_report()

    assert report.total_text == "0"
    assert report.average_text == "0"
    assert report.services == []


async def test_current_view_and_worker_breakdown(settings_factory: Callable[..., Settings]) -> None:
    session = _demo_session(settings_factory)
    await session.refresh()

    view = session.current_view()
    dates = [r.date for r in view]
    assert dates == sorted(dates, reverse=True)

    session.set_filter("top")
    assert [r.amount for r in session.current_view()] == [
        Decimal("15200"),
        Decimal("12300"),
        Decimal("9600"),
        Decimal("7850"),
        Decimal("5400"),
    ]

    workers = session.worker_breakdown()
    assert workers[0].key == "#cryptomaster"
    assert workers[0].total_amount == Decimal("15200")
