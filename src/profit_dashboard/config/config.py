# -*- coding: utf-8 -*-
"""Settings loaded from the environment (and .env) with pydantic-settings.

Nested values use <SECTION>__<KEY>, e.g. API__BASE_URL, DASHBOARD__PAGE_SIZE,
TELEGRAM__CHAT_ID.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
ChannelLevel = Literal["info", "success", "warning", "error"]


class AppSettings(BaseSettings):
    """Identity of the running process, attached to every log event."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "profit-dashboard"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Where structlog output goes: console, rotating file, Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    log_to_console: bool = True
    console_level: LogLevel = "INFO"
    json_format: bool = Field(default=False, description="JSON instead of the dev console renderer.")

    log_to_file: bool = False
    file_level: LogLevel = "INFO"
    log_file_path: str = "logs/profit_dashboard.log"
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = Field(default="midnight", description="TimedRotatingFileHandler rotation unit.")
    log_file_interval: int = Field(default=1, ge=1)
    log_file_backup_count: int = Field(default=30, ge=0)
    log_file_utc: bool = True

    logfire_enabled: bool = False
    logfire_level: LogLevel = "INFO"
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Profit backend HTTP API."""

    model_config = SettingsConfigDict(extra="ignore")

    base_url: str = Field(
        default="http://127.0.0.1:5000",
        description="Backend origin; /api/... paths are appended.",
    )
    timeout_seconds: float = Field(default=15.0, ge=1.0, le=120.0)
    max_retries: int = Field(
        default=3,
        ge=1,
        le=20,
        description="GET attempts per request (POST is sent once).",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return value


class DashboardSettings(BaseSettings):
    """Paging, display and identity settings for the dashboard session."""

    model_config = SettingsConfigDict(extra="ignore")

    page_size: int = Field(default=5, ge=1, le=500, description="Profits per page.")
    default_worker_percent: int = Field(
        default=70,
        ge=0,
        le=100,
        description="Worker percent used when the backend omits it.",
    )
    unknown_service: str = Field(default="unknown", description="Sentinel for a missing service.")
    unknown_worker: str = Field(default="unknown", description="Sentinel for a missing worker.")
    top_limit: int = Field(default=5, ge=1, le=100, description="Size of the 'top' view.")
    max_decimals: int = Field(default=3, ge=0, le=10, description="Decimals shown for averages.")
    identity_debounce_seconds: float = Field(
        default=1.0,
        ge=0.0,
        le=30.0,
        description="Input inactivity before a handle is resolved.",
    )
    identity_context: Optional[str] = Field(
        default=None,
        description="Raw identity-provider init data (query string with a 'user' field).",
    )
    demo_mode: bool = Field(
        default=False,
        description="Serve built-in demo profits and keep the running total client-side.",
    )
    load_all_pages: bool = Field(
        default=False,
        description="Entry point keeps loading pages until the backend reports no more.",
    )

    @field_validator("identity_context")
    @classmethod
    def _blank_context_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()


class TelegramNotificationSettings(BaseSettings):
    """Telegram chat notifications."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = False
    api_key: Optional[str] = Field(default=None, description="Bot API token.")
    chat_id: Optional[str] = Field(default=None, description="Target chat ID.")
    min_level: ChannelLevel = Field(
        default="info",
        description="Lowest notification level sent to the chat.",
    )
    max_message_length: int = Field(default=4096, ge=64, le=4096)
    messages_per_minute: int = Field(default=30, ge=1, le=120)
    max_retries: int = Field(default=5, ge=0, le=20)
    backoff_base_seconds: float = Field(default=1.0, ge=0.1, le=60.0)
    connect_timeout: float = Field(default=10.0, ge=0.1, le=60.0)
    read_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    write_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    pool_timeout: float = Field(default=10.0, ge=0.1, le=60.0)


class ConsoleNotificationSettings(BaseSettings):
    """Plain-text notifications on stdout."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True
    min_level: ChannelLevel = "info"


class Settings(BaseSettings):
    """Root settings object; the rest of the code never reads os.environ."""

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    dashboard: DashboardSettings = Field(default_factory=DashboardSettings)
    telegram: TelegramNotificationSettings = Field(default_factory=TelegramNotificationSettings)
    console: ConsoleNotificationSettings = Field(default_factory=ConsoleNotificationSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Environment-backed settings with per-section overrides.

        Example: Settings.from_env(dashboard={"page_size": 10, "demo_mode": True}).
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Process-wide Settings, built on first use.

        from profit_dashboard.config import get_settings

        page_size = get_settings().dashboard.page_size
    """
    return Settings()
