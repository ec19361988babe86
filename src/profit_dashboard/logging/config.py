# -*- coding: utf-8 -*-
"""structlog + Logfire setup for the dashboard process."""

from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Optional

import logfire
import structlog
from structlog.types import EventDict, Processor

from profit_dashboard.config import LoggingSettings, Settings, get_settings

_LOGFIRE_LEVELS: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}

# httpx logs full request URLs at INFO; Telegram URLs carry the bot token.
_QUIET_LOGGERS = ("httpx", "httpcore", "aiohttp.access")


def service_context(settings: Settings) -> Processor:
    """Processor adding logger name, app identity and the dashboard mode (demo/live)."""
    app = settings.app
    app_name = app.service_name or app.app_name
    mode = "demo" if settings.dashboard.demo_mode else "live"

    def _add(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        stdlib_logger = getattr(logger, "_logger", None)
        event_dict.setdefault(
            "logger",
            getattr(stdlib_logger, "name", None) or getattr(logger, "name", "") or "",
        )
        event_dict["app_name"] = app_name
        if app.service_version:
            event_dict["service_version"] = app.service_version
        event_dict["environment"] = app.environment
        event_dict["dashboard_mode"] = mode
        return event_dict

    return _add


def _level(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def _build_handlers(cfg: LoggingSettings) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if cfg.log_to_console:
        console = logging.StreamHandler()
        console.setLevel(_level(cfg.console_level))
        handlers.append(console)
    if cfg.log_to_file:
        path = Path(cfg.log_file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = TimedRotatingFileHandler(
            path,
            when=cfg.log_file_when,
            interval=cfg.log_file_interval,
            backupCount=cfg.log_file_backup_count,
            encoding="utf-8",
            utc=cfg.log_file_utc,
        )
        rotating.setLevel(_level(cfg.file_level))
        handlers.append(rotating)
    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handlers


def _renderer(cfg: LoggingSettings) -> Processor:
    # a log file is always JSON so it stays machine readable
    if cfg.log_to_file or cfg.json_format:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Route structlog through stdlib handlers (console and/or rotating file) and, if enabled, Logfire."""
    settings = settings or get_settings()
    cfg = settings.logging

    handlers = _build_handlers(cfg)
    if handlers:
        logging.basicConfig(level=min(h.level for h in handlers), handlers=handlers, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if cfg.logfire_enabled:
        app = settings.app
        logfire.configure(
            token=cfg.logfire_token,
            service_name=app.service_name or app.app_name,
            service_version=app.service_version,
            min_level=_LOGFIRE_LEVELS.get(cfg.logfire_level, "info"),  # type: ignore[arg-type]
            environment=app.environment,
        )

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        service_context(settings),
    ]
    if cfg.logfire_enabled:
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]
    if handlers:
        processors.append(_renderer(cfg))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
