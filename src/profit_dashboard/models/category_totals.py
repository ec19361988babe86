"""CategoryTotals: count and summed amount for one service or worker bucket."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class CategoryTotals:
    """Breakdown bucket keyed by a service label or a worker handle."""

    key: str
    count: int
    total_amount: Decimal
