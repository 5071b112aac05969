"""Shared FastAPI dependencies."""

from taskboard_service.core.dependencies.auth import (
    USER_ID_HEADER,
    CurrentUserIdDep,
    get_current_user_id,
)

__all__ = ["USER_ID_HEADER", "CurrentUserIdDep", "get_current_user_id"]
