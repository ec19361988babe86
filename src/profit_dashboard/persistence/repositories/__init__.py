# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, etc.)."""

from profit_dashboard.persistence.repositories.interfaces import IIdentityCacheRepository
from profit_dashboard.persistence.repositories.in_memory import InMemoryIdentityCacheRepository

__all__ = [
    "IIdentityCacheRepository",
    "InMemoryIdentityCacheRepository",
]
