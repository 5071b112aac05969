"""FastAPI dependencies for the notifications feature."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from taskboard_service.core.settings import get_notification_settings
from taskboard_service.features.boards.source import (
    BoardSource,
    InMemoryBoardSource,
    JsonFileBoardSource,
)
from taskboard_service.features.notifications.service import NotificationDigestService

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_board_source() -> BoardSource:
    """Get the process-wide board source.

    Uses the JSON board export named by NOTIFY_DATA_FILE. Without one, an
    empty in-memory source is returned and every digest is empty.
    """
    settings = get_notification_settings()
    if settings.data_file is not None:
        return JsonFileBoardSource(settings.data_file)
    logger.warning("No board data source configured; notification digests will be empty")
    return InMemoryBoardSource()


def get_notification_service() -> NotificationDigestService:
    """Get a digest service wired from settings and the board source."""
    return NotificationDigestService.from_settings(
        get_board_source(), get_notification_settings(),
    )


NotificationServiceDep = Annotated[
    NotificationDigestService, Depends(get_notification_service)
]
