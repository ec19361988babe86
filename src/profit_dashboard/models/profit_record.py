"""ProfitRecord: one ingested profit event (deposit amount, service, worker, date).

Records are immutable. They are created when a page is ingested from the
backend or when a submission is appended, and only removed by a store reset.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping

from profit_dashboard.codec import ZERO, canonical_text, parse_amount
from profit_dashboard.utils.dates import parse_record_date
from profit_dashboard.utils.validation import is_blank

DEFAULT_WORKER_PERCENT = 70
UNKNOWN_SERVICE = "unknown"
UNKNOWN_WORKER = "unknown"


def worker_percent_text(value: Any, default: int = DEFAULT_WORKER_PERCENT) -> str:
    """Render a worker percent as "NN%". Falsy or non-numeric values use default."""
    number = parse_amount(value) if value else ZERO
    if number == 0:
        number = Decimal(default)
    return f"{canonical_text(number)}%"


@dataclass(frozen=True, slots=True)
class ProfitRecord:
    """A single profit event as shown on the dashboard.

    amount is never negative; date is always an aware datetime.
    """

    amount: Decimal
    """Deposit amount (canonical)."""
    worker_percent_text: str
    """Worker share for display, e.g. "70%"."""
    service: str
    worker: str
    """Worker handle as reported (may carry a leading "@")."""
    date: datetime
    project_running_total: Decimal
    """Project balance as of this record, as reported (never recomputed)."""

    @classmethod
    def create(
        cls,
        *,
        amount: Any,
        service: str | None = None,
        worker: str | None = None,
        date: Any = None,
        worker_percent: Any = None,
        project_running_total: Any = None,
        default_worker_percent: int = DEFAULT_WORKER_PERCENT,
        unknown_service: str = UNKNOWN_SERVICE,
        unknown_worker: str = UNKNOWN_WORKER,
        now: datetime | None = None,
    ) -> ProfitRecord:
        """Create a normalized record; missing fields fall back to defaults."""
        return cls(
            amount=parse_amount(amount),
            worker_percent_text=worker_percent_text(worker_percent, default_worker_percent),
            service=unknown_service if is_blank(service) else str(service),
            worker=unknown_worker if is_blank(worker) else str(worker),
            date=parse_record_date(date, now=now),
            project_running_total=parse_amount(project_running_total),
        )

    @classmethod
    def from_response(
        cls,
        response: Mapping[str, Any],
        *,
        default_worker_percent: int = DEFAULT_WORKER_PERCENT,
        unknown_service: str = UNKNOWN_SERVICE,
        unknown_worker: str = UNKNOWN_WORKER,
        now: datetime | None = None,
    ) -> ProfitRecord:
        """Build from a raw backend profit item (snake_case keys).

        Raises:
            TypeError: If response is not a mapping (malformed page).
        """
        if not isinstance(response, Mapping):
            raise TypeError(f"profit item must be an object, got {type(response).__name__}")
        return cls.create(
            amount=response.get("amount"),
            service=response.get("service"),
            worker=response.get("worker_name") or response.get("worker"),
            date=response.get("date"),
            worker_percent=response.get("worker_percent"),
            project_running_total=response.get("project_amount"),
            default_worker_percent=default_worker_percent,
            unknown_service=unknown_service,
            unknown_worker=unknown_worker,
            now=now,
        )
