# -*- coding: utf-8 -*-
"""Application services."""

from profit_dashboard.services.aggregation import AggregationService
from profit_dashboard.services.dashboard import DashboardSession, StatisticsReport
from profit_dashboard.services.filtering import FilterKind, ProfitFilterPolicy
from profit_dashboard.services.identity import Debouncer, IdentityResolver
from profit_dashboard.services.notifications import ProfitEventsNotifier
from profit_dashboard.services.records import ProfitFeedService, RecordStore
from profit_dashboard.services.submission import ProfitSubmissionService, SubmissionResult
from profit_dashboard.services.workers import (
    WorkerDirectoryService,
    WorkerRegistrationResult,
    WorkerRegistrationService,
    WorkerSummary,
)

__all__ = [
    "AggregationService",
    "DashboardSession",
    "Debouncer",
    "FilterKind",
    "IdentityResolver",
    "ProfitEventsNotifier",
    "ProfitFeedService",
    "ProfitFilterPolicy",
    "ProfitSubmissionService",
    "RecordStore",
    "StatisticsReport",
    "SubmissionResult",
    "WorkerDirectoryService",
    "WorkerRegistrationResult",
    "WorkerRegistrationService",
    "WorkerSummary",
]
