"""Demo data for offline use."""

from profit_dashboard.services.demo.demo_data import (
    DEMO_STATS,
    build_demo_payload,
    build_demo_records,
)

__all__ = [
    "DEMO_STATS",
    "build_demo_payload",
    "build_demo_records",
]
