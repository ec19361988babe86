# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/, etc."""

from profit_dashboard.persistence.repositories.interfaces.identity_cache_repository import (
    IIdentityCacheRepository,
)

__all__ = ["IIdentityCacheRepository"]
