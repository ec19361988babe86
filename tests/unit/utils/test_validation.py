# -*- coding: utf-8 -*-
"""Unit tests for validation helpers."""

from __future__ import annotations

import pytest

from profit_dashboard.utils.validation import is_blank, strip_handle


@pytest.mark.parametrize(
    ("handle", "expected"),
    [("@alice", "alice"), (" @alice ", "alice"), ("alice", "alice"), ("@@bob", "@bob"), (None, ""), ("a@b", "a@b")],
)
def test_strip_handle_removes_one_leading_at(handle: str | None, expected: str) -> None:
    assert strip_handle(handle) == expected


def test_is_blank() -> None:
    assert is_blank(None)
    assert is_blank("  ")
    assert not is_blank("x")
    assert not is_blank(0)
