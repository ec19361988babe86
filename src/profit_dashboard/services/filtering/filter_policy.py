# -*- coding: utf-8 -*-
"""ProfitFilterPolicy: pure selection and ordering of records for display.

No I/O and no state. Applying a kind twice gives the same result as
applying it once.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from enum import Enum

from profit_dashboard.models.profit_record import ProfitRecord
from profit_dashboard.utils.dates import local_day_bounds

DEFAULT_TOP_LIMIT = 5


class FilterKind(str, Enum):
    """Views of the profit log."""

    ALL = "all"
    TODAY = "today"
    TOP = "top"

    @classmethod
    def parse(cls, value: str | FilterKind) -> FilterKind:
        """Return the kind for value ("all", "today", "top").

        Raises:
            ValueError: If value is not a known kind.
        """
        if isinstance(value, FilterKind):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown filter kind: {value!r}") from None


class ProfitFilterPolicy:
    """Pure policy: selects and orders the records shown for a FilterKind.

    - all: every record, newest first.
    - today: records inside the current local day, newest first.
    - top: the top_limit largest amounts, largest first.

    Sorting is stable: equal keys keep arrival order.
    """

    def __init__(self, top_limit: int = DEFAULT_TOP_LIMIT) -> None:
        self._top_limit = top_limit

    @property
    def top_limit(self) -> int:
        return self._top_limit

    def apply(
        self,
        records: Iterable[ProfitRecord],
        kind: FilterKind | str,
        *,
        now: datetime | None = None,
    ) -> list[ProfitRecord]:
        """Return a new list; records is not modified.

        Args:
            records: Records in arrival order.
            kind: View to build.
            now: Reference time for "today" (defaults to the current local time).
        """
        kind = FilterKind.parse(kind)
        items = list(records)
        if kind is FilterKind.TOP:
            by_amount = sorted(items, key=lambda r: r.amount, reverse=True)
            return by_amount[: self._top_limit]

        if kind is FilterKind.TODAY:
            start, end = local_day_bounds(now)
            items = [r for r in items if start <= r.date < end]

        return sorted(items, key=lambda r: r.date, reverse=True)
