"""AggregateStats: backend-reported project totals, replaced only as a unit."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping

from profit_dashboard.codec import ZERO, parse_amount


def _as_count(value: Any) -> int:
    """Backend counter to int. Missing -> 0; malformed raises ValueError."""
    if value is None or value == "":
        return 0
    count = int(value)
    if count < 0:
        raise ValueError(f"counter must be non-negative, got {value!r}")
    return count


@dataclass(frozen=True, slots=True)
class AggregateStats:
    """Project totals. The backend is authoritative: they may cover records never paged in."""

    total_amount: Decimal = ZERO
    worker_count: int = 0
    record_count: int = 0

    @classmethod
    def zero(cls) -> AggregateStats:
        return cls()

    @classmethod
    def from_response(cls, response: Mapping[str, Any]) -> AggregateStats:
        """Build from a GET /api/data payload (total_amount, workers_count, profits_count).

        Raises:
            TypeError: If response is not a mapping.
            ValueError: If a counter is malformed.
        """
        if not isinstance(response, Mapping):
            raise TypeError(f"totals must be an object, got {type(response).__name__}")
        return cls(
            total_amount=parse_amount(response.get("total_amount")),
            worker_count=_as_count(response.get("workers_count")),
            record_count=_as_count(response.get("profits_count")),
        )

    def with_submission(self, total_amount: Any, record_count: Any) -> AggregateStats:
        """Return a copy with the totals reported after a submission (worker count kept)."""
        return AggregateStats(
            total_amount=parse_amount(total_amount),
            worker_count=self.worker_count,
            record_count=_as_count(record_count),
        )
