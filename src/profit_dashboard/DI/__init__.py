"""Dependency injection."""

from profit_dashboard.DI.container import Container

__all__ = ["Container"]
