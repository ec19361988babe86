# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from profit_dashboard.clients.dashboard_api import DashboardApiClient
from profit_dashboard.clients.http import AsyncHttpClient
from profit_dashboard.config import Settings, get_settings
from profit_dashboard.events.bus import get_event_bus
from profit_dashboard.notifications.notification_manager import NotificationService
from profit_dashboard.notifications.strategies.base import BaseNotificationStrategy
from profit_dashboard.notifications.strategies.console import ConsoleNotifier
from profit_dashboard.notifications.strategies.telegram import TelegramNotifier
from profit_dashboard.notifications.stylers.notification_styler import EventNotificationStyler
from profit_dashboard.persistence.repositories.in_memory import InMemoryIdentityCacheRepository
from profit_dashboard.services.aggregation import AggregationService
from profit_dashboard.services.dashboard import DashboardSession
from profit_dashboard.services.filtering import ProfitFilterPolicy
from profit_dashboard.services.identity import (
    Debouncer,
    IdentityResolver,
    settings_context_provider,
)
from profit_dashboard.services.notifications import ProfitEventsNotifier
from profit_dashboard.services.records import ProfitFeedService, RecordStore
from profit_dashboard.services.submission import ProfitSubmissionService
from profit_dashboard.services.workers import (
    WorkerDirectoryService,
    WorkerRegistrationService,
)


def _build_notification_notifiers(
    settings: Settings,
    styler: EventNotificationStyler,
) -> list[BaseNotificationStrategy]:
    notifiers: list[BaseNotificationStrategy] = []
    if settings.console.enabled:
        notifiers.append(ConsoleNotifier(settings=settings, styler=styler))
    if settings.telegram.enabled:
        notifiers.append(TelegramNotifier(settings=settings, styler=styler))
    return notifiers


def _build_filter_policy(settings: Settings) -> ProfitFilterPolicy:
    return ProfitFilterPolicy(top_limit=settings.dashboard.top_limit)


def _build_debouncer(settings: Settings) -> Debouncer:
    return Debouncer(settings.dashboard.identity_debounce_seconds)


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, HTTP/API clients, store, services and notifications."""

    config = providers.Callable(get_settings)

    event_bus = providers.Callable(get_event_bus)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    dashboard_api_client = providers.Singleton(
        DashboardApiClient,
        http_client=http_client,
        settings=config,
    )

    record_store = providers.Singleton(
        RecordStore,
        settings=config,
    )

    identity_cache_repository = providers.Singleton(InMemoryIdentityCacheRepository)

    identity_resolver = providers.Singleton(
        IdentityResolver,
        cache=identity_cache_repository,
        context_provider=providers.Callable(settings_context_provider, config),
    )

    identity_debouncer = providers.Factory(_build_debouncer, config)

    aggregation_service = providers.Singleton(AggregationService)

    filter_policy = providers.Singleton(_build_filter_policy, config)

    profit_feed_service = providers.Singleton(
        ProfitFeedService,
        api=dashboard_api_client,
        store=record_store,
        settings=config,
        event_bus=event_bus,
    )

    dashboard_session = providers.Singleton(
        DashboardSession,
        feed=profit_feed_service,
        aggregation=aggregation_service,
        filter_policy=filter_policy,
        settings=config,
    )

    profit_submission_service = providers.Singleton(
        ProfitSubmissionService,
        api=dashboard_api_client,
        feed=profit_feed_service,
        settings=config,
        event_bus=event_bus,
    )

    worker_registration_service = providers.Singleton(
        WorkerRegistrationService,
        api=dashboard_api_client,
        resolver=identity_resolver,
        debouncer=identity_debouncer,
    )

    worker_directory_service = providers.Singleton(
        WorkerDirectoryService,
        api=dashboard_api_client,
        aggregation=aggregation_service,
        settings=config,
        event_bus=event_bus,
    )

    notification_styler = providers.Singleton(EventNotificationStyler)

    notification_service = providers.Singleton(
        NotificationService,
        notifiers=providers.Callable(_build_notification_notifiers, config, notification_styler),
    )

    profit_events_notifier = providers.Singleton(
        ProfitEventsNotifier,
        notification_service=notification_service,
        event_bus=event_bus,
    )
