# -*- coding: utf-8 -*-
"""Unit tests for IdentityResolver."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from urllib.parse import quote, urlencode

import pytest

from profit_dashboard.config import Settings
from profit_dashboard.models.identity import IdentitySource
from profit_dashboard.persistence.repositories.in_memory import InMemoryIdentityCacheRepository
from profit_dashboard.services.identity import (
    IdentityResolver,
    parse_session_user,
    settings_context_provider,
)


def _init_data(user: dict[str, object]) -> str:
    return urlencode({"query_id": "AAE", "user": json.dumps(user), "auth_date": "1755456000"})


class _CountingProvider:
    def __init__(self, value: str | None) -> None:
        self.value = value
        self.calls = 0

    def __call__(self) -> str | None:
        self.calls += 1
        return self.value


async def test_no_context_gives_offline_fallback() -> None:
    resolver = IdentityResolver(InMemoryIdentityCacheRepository(), lambda: None)

    record = await resolver.resolve("alice")

    assert record.source is IdentitySource.OFFLINE_FALLBACK
    assert record.first_name == "alice"
    assert record.last_name == ""
    assert record.id is None


async def test_matching_session_user_gives_native_record() -> None:
    init_data = _init_data({"id": 42, "first_name": "Alice", "last_name": "L", "username": "alice"})
    resolver = IdentityResolver(InMemoryIdentityCacheRepository(), lambda: init_data)

    record = await resolver.resolve("alice")

    assert record.source is IdentitySource.NATIVE
    assert (record.id, record.first_name, record.last_name) == (42, "Alice", "L")


async def test_native_record_defaults_missing_names() -> None:
    init_data = _init_data({"id": 42, "username": "alice"})
    resolver = IdentityResolver(InMemoryIdentityCacheRepository(), lambda: init_data)

    record = await resolver.resolve("alice")

    assert record.first_name == "alice"
    assert record.last_name == ""


async def test_other_user_gives_native_fallback() -> None:
    init_data = _init_data({"id": 42, "first_name": "Bob", "username": "bob"})
    resolver = IdentityResolver(InMemoryIdentityCacheRepository(), lambda: init_data)

    record = await resolver.resolve("alice")

    assert record.source is IdentitySource.NATIVE_FALLBACK
    assert record.id is None
    assert record.first_name == "alice"


async def test_context_without_user_gives_native_fallback() -> None:
    resolver = IdentityResolver(InMemoryIdentityCacheRepository(), lambda: "query_id=AAE")

    assert (await resolver.resolve("alice")).source is IdentitySource.NATIVE_FALLBACK


@pytest.mark.parametrize("user_param", ["{not json", quote("[1, 2]"), quote('{"id": "x"}')])
async def test_malformed_user_gives_error_fallback(user_param: str) -> None:
    resolver = IdentityResolver(InMemoryIdentityCacheRepository(), lambda: f"user={user_param}")

    record = await resolver.resolve("alice")

    assert record.source is IdentitySource.ERROR_FALLBACK
    assert record.first_name == "alice"


async def test_username_match_is_case_sensitive() -> None:
    init_data = _init_data({"id": 1, "username": "Alice"})
    resolver = IdentityResolver(InMemoryIdentityCacheRepository(), lambda: init_data)

    assert (await resolver.resolve("alice")).source is IdentitySource.NATIVE_FALLBACK


async def test_second_resolution_returns_cached_object_without_resolving() -> None:
    provider = _CountingProvider(None)
    resolver = IdentityResolver(InMemoryIdentityCacheRepository(), provider)

    first = await resolver.resolve("alice")
    provider.value = _init_data({"id": 1, "username": "alice"})
    second = await resolver.resolve("alice")

    assert second is first
    assert provider.calls == 1


async def test_concurrent_resolutions_converge() -> None:
    cache = InMemoryIdentityCacheRepository()
    resolver = IdentityResolver(cache, lambda: None)

    a1, b, a2 = await asyncio.gather(
        resolver.resolve("alice"),
        resolver.resolve("bob"),
        resolver.resolve("alice"),
    )

    assert a1 is a2
    assert b.handle == "bob"
    assert len(cache) == 2


def test_parse_session_user_decodes_double_encoded_user() -> None:
    user = json.dumps({"id": 5, "username": "carol", "language_code": "ru"})
    init_data = urlencode({"user": quote(user)})

    parsed = parse_session_user(init_data)

    assert parsed is not None
    assert parsed.id == 5
    assert parsed.username == "carol"


def test_settings_context_provider_reads_dashboard_setting(
    settings_factory: Callable[..., Settings],
) -> None:
    provider = settings_context_provider(settings_factory(identity_context="user=%7B%7D"))

    assert provider() == "user=%7B%7D"
