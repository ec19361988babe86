"""In-memory identity cache (keyed by handle)."""

from __future__ import annotations

from profit_dashboard.models.identity import IdentityRecord
from profit_dashboard.persistence.repositories.interfaces.identity_cache_repository import (
    IIdentityCacheRepository,
)


class InMemoryIdentityCacheRepository(IIdentityCacheRepository):
    """In-memory implementation of IIdentityCacheRepository.

    save_if_absent does not await, so check-and-insert is atomic on the event loop.
    """

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: dict[str, IdentityRecord] = {}

    async def get(self, handle: str) -> IdentityRecord | None:
        """Return the cached record for handle, or None."""
        return self._store.get(handle)

    async def save_if_absent(self, record: IdentityRecord) -> IdentityRecord:
        """Store record unless the handle is cached; return the cached record."""
        return self._store.setdefault(record.handle, record)

    async def list_all(self) -> list[IdentityRecord]:
        """Return all cached records in insertion order."""
        return list(self._store.values())

    def __len__(self) -> int:
        return len(self._store)
