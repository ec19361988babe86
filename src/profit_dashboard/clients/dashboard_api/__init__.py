"""Profit backend API client and response schemas."""

from profit_dashboard.clients.dashboard_api.dashboard_api import DashboardApiClient
from profit_dashboard.clients.dashboard_api.schema import (
    ProfitSchema,
    ProfitsPageSchema,
    ProjectDataSchema,
    SubmissionResponseSchema,
    WorkerRegistrationResponseSchema,
    WorkerSchema,
)

__all__ = [
    "DashboardApiClient",
    "ProfitSchema",
    "ProfitsPageSchema",
    "ProjectDataSchema",
    "SubmissionResponseSchema",
    "WorkerRegistrationResponseSchema",
    "WorkerSchema",
]
