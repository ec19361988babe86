"""Built-in demo profits for running the dashboard without a backend."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from profit_dashboard.codec import ZERO, parse_amount
from profit_dashboard.models.aggregate_stats import AggregateStats
from profit_dashboard.models.profit_record import ProfitRecord

DEMO_STATS = AggregateStats(total_amount=parse_amount(34463), worker_count=6, record_count=156)

# Oldest first; the running total is accumulated in this order.
_DEMO_PROFITS: tuple[dict[str, Any], ...] = (
    {"amount": "5.400", "worker_percent": 85, "service": "WalletPay", "worker_name": "#cryptohunter", "date": (2025, 8, 17, 21, 10)},
    {"amount": "12.300", "worker_percent": 65, "service": "FiatGate", "worker_name": "#protrader", "date": (2025, 8, 18, 15, 20)},
    {"amount": "7.850", "worker_percent": 75, "service": "CryptoEx", "worker_name": "#moneymaker", "date": (2025, 8, 18, 19, 30)},
    {"amount": "15.200", "worker_percent": 70, "service": "BankApp", "worker_name": "#cryptomaster", "date": (2025, 8, 18, 22, 45)},
    {"amount": "9.600", "worker_percent": 80, "service": "MarketPlace", "worker_name": "#unluckdays", "date": (2025, 8, 19, 10, 15)},
)


def build_demo_payload() -> dict[str, Any]:
    """Return a GET /api/data shaped payload with the demo profits, newest first.

    Dates are naive (local time); project_amount is the cumulative sum of the
    parsed amounts.
    """
    running_total = ZERO
    profits: list[dict[str, Any]] = []
    for item in _DEMO_PROFITS:
        running_total += parse_amount(item["amount"])
        profits.append(
            {
                **item,
                "date": datetime(*item["date"]).isoformat(),
                "project_amount": running_total,
            }
        )
    profits.reverse()
    return {
        "total_amount": float(DEMO_STATS.total_amount),
        "workers_count": DEMO_STATS.worker_count,
        "profits_count": DEMO_STATS.record_count,
        "profits": profits,
    }


def build_demo_records() -> list[ProfitRecord]:
    """Demo profits as normalized records, newest first."""
    return [ProfitRecord.from_response(raw) for raw in build_demo_payload()["profits"]]
