# -*- coding: utf-8 -*-
"""
Entry point for the profit dashboard.

Orchestrates: logging, settings, container, first page + totals, optional
loading of every remaining page, a statistics summary, shutdown.

Run with: python -m profit_dashboard.main

Notebook usage:
    from profit_dashboard.main import run
    session = await run()
"""
from __future__ import annotations

import asyncio
from typing import Any

import structlog

from profit_dashboard.codec import format_grouped
from profit_dashboard.DI import Container
from profit_dashboard.config import get_settings
from profit_dashboard.logging.config import configure_logging
from profit_dashboard.notifications.types import NotificationMessage
from profit_dashboard.services.dashboard import DashboardSession


def _log_view(logger: Any, session: DashboardSession) -> None:
    for record in session.current_view():
        logger.info(
            "main_profit",
            date=record.date.isoformat(timespec="minutes"),
            amount=format_grouped(record.amount),
            worker_percent=record.worker_percent_text,
            service=record.service,
            worker=record.worker,
            project_amount=format_grouped(record.project_running_total),
        )


async def run() -> DashboardSession:
    settings = get_settings()
    configure_logging(settings)
    logger = structlog.get_logger("main")

    container = Container()
    http_client = container.http_client()
    session = container.dashboard_session()
    notifier = container.profit_events_notifier()
    notification_service = container.notification_service()
    await notification_service.initialize()
    notifier.start()

    notification_service.notify(
        NotificationMessage(
            event_type="system_started",
            message="Profit dashboard started",
            payload={"base_url": settings.api.base_url, "demo_mode": settings.dashboard.demo_mode},
        )
    )
    try:
        await session.refresh()
        if settings.dashboard.load_all_pages:
            await session.load_all()

        report = session.statistics_report()
        logger.info(
            "main_statistics",
            total_amount=report.total_text,
            profits_count=report.stats.record_count,
            workers_count=report.stats.worker_count,
            average_profit=report.average_text,
            records_loaded=len(session.store),
            has_more=session.has_more,
        )
        for bucket in report.services:
            logger.info(
                "main_service_totals",
                service=bucket.key,
                count=bucket.count,
                total_amount=format_grouped(bucket.total_amount),
            )
        _log_view(logger, session)
    finally:
        notifier.stop()
        notification_service.notify(
            NotificationMessage(
                event_type="system_stopped",
                message="Profit dashboard stopped",
                payload={},
            )
        )
        await notification_service.shutdown()
        await http_client.aclose()
        logger.info("main_shutdown_complete")
    return session


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
