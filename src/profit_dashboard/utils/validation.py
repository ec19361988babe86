"""Validation helpers for worker handles and form fields."""

from __future__ import annotations

from typing import Any


def strip_handle(handle: Any) -> str:
    """Return the handle trimmed and without a leading "@" ("@alice " -> "alice")."""
    if handle is None:
        return ""
    s = str(handle).strip()
    return s[1:] if s.startswith("@") else s


def is_blank(value: Any) -> bool:
    """Return True if value is None or an all-whitespace string."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()
