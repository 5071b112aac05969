"""Notification digest API router.

Endpoints:
- GET /notifications - Due-date digest for the authenticated caller
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

# Runtime imports so FastAPI can resolve the Annotated[..., Depends(...)] metadata
from taskboard_service.core.dependencies.auth import CurrentUserIdDep  # noqa: TC001
from taskboard_service.features.notifications.dependencies import (  # noqa: TC001
    NotificationServiceDep,
)
from taskboard_service.features.notifications.schemas import NotificationResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get(
    "",
    response_model=NotificationResponse,
    summary="Get due-date notifications",
    description=(
        "Categorize the caller's pending cards into overdue, due within an hour "
        "and due within a day, with summary counters."
    ),
)
async def get_notifications(
    user_id: CurrentUserIdDep,
    service: NotificationServiceDep,
    now: Annotated[
        int | None,
        Query(ge=0, description="Reference time in epoch milliseconds (defaults to server time)"),
    ] = None,
) -> NotificationResponse:
    """Return the caller's notification digest.

    Storage problems never fail this endpoint; they only shrink the digest.
    An empty digest is a valid answer.
    """
    return await service.get_notifications(user_id, now_ms=now)
