"""Persistence layer (repositories, etc.)."""

from profit_dashboard.persistence.repositories import (
    IIdentityCacheRepository,
    InMemoryIdentityCacheRepository,
)

__all__ = [
    "IIdentityCacheRepository",
    "InMemoryIdentityCacheRepository",
]
