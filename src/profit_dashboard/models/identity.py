"""IdentityRecord: profile fields resolved for a worker handle."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class IdentitySource(str, Enum):
    """Where an identity record came from, in decreasing confidence."""

    NATIVE = "native"
    """Matched the identity provider's own session user."""
    NATIVE_FALLBACK = "native-fallback"
    """Provider available, but the handle is not the session user."""
    OFFLINE_FALLBACK = "offline-fallback"
    """No provider context available."""
    ERROR_FALLBACK = "error-fallback"
    """Provider context could not be parsed."""


@dataclass(frozen=True, slots=True)
class IdentityRecord:
    """Resolved identity for a handle. Identity: handle (case-sensitive, no "@")."""

    handle: str
    first_name: str
    last_name: str
    source: IdentitySource
    id: int | None = None

    @classmethod
    def fallback(cls, handle: str, source: IdentitySource) -> IdentityRecord:
        """Low-confidence record with the handle standing in for the name."""
        return cls(
            handle=handle,
            first_name=handle,
            last_name="",
            source=source,
            id=None,
        )
