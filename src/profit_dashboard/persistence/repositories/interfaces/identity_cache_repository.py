# -*- coding: utf-8 -*-
"""Abstract interface for the identity cache (in-memory, shared store, etc.)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from profit_dashboard.models.identity import IdentityRecord


class IIdentityCacheRepository(ABC):
    """Interface for session-scoped identity records keyed by handle.

    Entries are never evicted or replaced: the first record stored for a
    handle is trusted for the lifetime of the session.
    """

    @abstractmethod
    async def get(self, handle: str) -> Optional[IdentityRecord]:
        """Return the cached record for handle (case-sensitive), or None."""
        ...

    @abstractmethod
    async def save_if_absent(self, record: IdentityRecord) -> IdentityRecord:
        """Store record unless its handle is already cached.

        Returns:
            The record now cached for the handle (the existing one if present).
        """
        ...

    @abstractmethod
    async def list_all(self) -> list[IdentityRecord]:
        """Return all cached records in insertion order."""
        ...
