"""Profit backend response types (keys match the JSON payloads, snake_case)."""

from __future__ import annotations

from typing import TypedDict


class ProfitSchema(TypedDict, total=False):
    """Item of the "profits" array in GET /api/data and GET /api/profits."""

    amount: float | str
    worker_percent: int
    service: str
    worker_name: str
    date: str
    project_amount: float | str


class ProjectDataSchema(TypedDict, total=False):
    """GET /api/data: project totals plus the newest profits."""

    total_amount: float
    workers_count: int
    profits_count: int
    profits: list[ProfitSchema]


class ProfitsPageSchema(TypedDict, total=False):
    """GET /api/profits?limit=&offset=: one page of profits."""

    profits: list[ProfitSchema]
    has_more: bool


class SubmissionResponseSchema(TypedDict, total=False):
    """POST /api/profits response."""

    success: bool
    total_amount: float
    profits_count: int
    telegram_info: str
    error: str


class WorkerSchema(TypedDict, total=False):
    """Item of the "workers" array in GET /api/workers."""

    username: str
    name: str
    telegram_id: str
    register_date: str


class WorkerRegistrationResponseSchema(TypedDict, total=False):
    """POST /api/workers/add-telegram response."""

    action: str
    """One of: added, updated, no_changes, found_existing."""
    worker: WorkerSchema
    error: str
