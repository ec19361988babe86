"""In-memory repository implementations."""

from profit_dashboard.persistence.repositories.in_memory.identity_cache_repository import (
    InMemoryIdentityCacheRepository,
)

__all__ = ["InMemoryIdentityCacheRepository"]
