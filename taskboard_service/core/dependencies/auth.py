"""Caller identity dependency.

Authentication happens upstream (gateway or auth proxy), which forwards the
authenticated user id in the ``X-User-Id`` header. Routers only read it.

    from taskboard_service.core.dependencies.auth import CurrentUserIdDep

    @router.get("/me")
    async def me(user_id: CurrentUserIdDep):
        return {"user_id": user_id}
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header

from taskboard_service.core.exceptions import MissingAuthenticationError
from taskboard_service.infra.logging import set_log_context

USER_ID_HEADER = "X-User-Id"


async def get_current_user_id(
    x_user_id: Annotated[
        str | None, Header(alias=USER_ID_HEADER, description="Authenticated user id"),
    ] = None,
) -> str:
    """Return the authenticated caller's id.

    Raises:
        MissingAuthenticationError: If the identity header is absent or blank.
    """
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise MissingAuthenticationError
    set_log_context(user_id=user_id)
    return user_id


CurrentUserIdDep = Annotated[str, Depends(get_current_user_id)]
