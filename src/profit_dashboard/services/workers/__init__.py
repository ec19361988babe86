"""Worker registration and directory."""

from profit_dashboard.services.workers.worker_directory import (
    WorkerDirectoryService,
    WorkerSummary,
    initials,
)
from profit_dashboard.services.workers.worker_registration import (
    WorkerRegistrationResult,
    WorkerRegistrationService,
)

__all__ = [
    "WorkerDirectoryService",
    "WorkerRegistrationResult",
    "WorkerRegistrationService",
    "WorkerSummary",
    "initials",
]
