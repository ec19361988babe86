"""Configuration subpackage."""

from profit_dashboard.config.config import (
    ApiSettings,
    AppSettings,
    ConsoleNotificationSettings,
    DashboardSettings,
    LoggingSettings,
    Settings,
    TelegramNotificationSettings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "AppSettings",
    "ConsoleNotificationSettings",
    "DashboardSettings",
    "LoggingSettings",
    "Settings",
    "TelegramNotificationSettings",
    "get_settings",
]
