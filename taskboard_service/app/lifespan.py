"""Application lifespan: startup and shutdown hooks."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from taskboard_service.core.settings import (
    get_app_settings,
    get_logging_settings,
    get_notification_settings,
)
from taskboard_service.infra.logging.config import setup_logging, shutdown

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup and flush it on shutdown."""
    app_settings = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), force=True)

    notify_settings = get_notification_settings()
    logger.info(
        "Application starting",
        extra={
            "service": app_settings.service_name,
            "version": app_settings.version,
            "environment": app_settings.environment,
            "notification_scope": notify_settings.scope,
            "board_data_file": str(notify_settings.data_file) if notify_settings.data_file else None,
        },
    )

    yield

    logger.info("Application shutting down", extra={"service": app_settings.service_name})
    shutdown()
