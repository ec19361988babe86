"""Profit submission."""

from profit_dashboard.services.submission.profit_submission import (
    ProfitSubmissionService,
    SubmissionResult,
)

__all__ = [
    "ProfitSubmissionService",
    "SubmissionResult",
]
