"""Modular Pydantic Settings v2 configuration.

Settings are split by domain (app/logging/notifications), each with its own
environment prefix, and loaded through LRU-cached loaders:

    from taskboard_service.core.settings import get_notification_settings

    settings = get_notification_settings()
    print(settings.scope)

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file (development only)
"""

from __future__ import annotations

from .app import AppSettings
from .loader import (
    clear_all_settings_cache,
    get_app_settings,
    get_logging_settings,
    get_notification_settings,
)
from .logs import LoggingSettings
from .notifications import NotificationSettings, ScanScope

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "NotificationSettings",
    "ScanScope",
    "clear_all_settings_cache",
    "get_app_settings",
    "get_logging_settings",
    "get_notification_settings",
]
