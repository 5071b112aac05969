"""RFC 7807 exception handlers.

Every error leaving the API is a Problem Details body. The caller's
``user_id`` (when already resolved) and the ``X-Request-Id`` are echoed back
so clients can correlate a failed digest request with server logs.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskboard_service.core.dependencies.auth import USER_ID_HEADER
from taskboard_service.core.exceptions import AppException, default_title
from taskboard_service.core.schemas.problem_details import (
    FieldError,
    ProblemDetails,
    ValidationProblemDetails,
)
from taskboard_service.infra.logging import get_log_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"


def _correlation(request: Request) -> dict[str, Any]:
    """Identifiers tying a response to its log lines."""
    fields: dict[str, Any] = {
        "request_id": getattr(request.state, "request_id", None)
        or request.headers.get(REQUEST_ID_HEADER),
        "user_id": get_log_context().get("user_id"),
    }
    return {key: value for key, value in fields.items() if value}


def _problem_response(
    request: Request,
    problem: ProblemDetails,
    *,
    extra: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = problem.model_dump(mode="json", exclude_none=True)
    if extra:
        body.update(extra)
    request_id = _correlation(request).get("request_id")
    if request_id:
        body["request_id"] = request_id
    return JSONResponse(status_code=problem.status, content=body, headers=headers)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an AppException as Problem Details.

    401 responses name the identity header the gateway must forward.
    """
    logger.warning(
        "Request rejected",
        extra={
            **_correlation(request),
            "path": request.url.path,
            "problem_type": exc.type,
            "status_code": exc.status_code,
            "detail": exc.detail,
        },
    )
    headers = {"WWW-Authenticate": USER_ID_HEADER} if exc.status_code == 401 else None
    problem = ProblemDetails(
        type=exc.type,
        title=exc.title or default_title(exc.status_code),
        status=exc.status_code,
        detail=exc.detail,
        instance=exc.instance or request.url.path,
    )
    return _problem_response(request, problem, extra=exc.extra, headers=headers)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Render request validation errors with one entry per invalid field."""
    errors = [
        FieldError(
            field=".".join(str(part) for part in error["loc"]),
            message=error["msg"],
            type=error["type"],
            value=error.get("input"),
        )
        for error in exc.errors()
    ]
    logger.warning(
        "Invalid request parameters",
        extra={
            **_correlation(request),
            "path": request.url.path,
            "fields": [error.field for error in errors],
        },
    )
    problem = ValidationProblemDetails(
        type="validation-error",
        title="Validation Error",
        status=422,
        detail=f"Request validation failed for {len(errors)} field(s)",
        instance=request.url.path,
        errors=errors,
    )
    return _problem_response(request, problem)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures with traceback; the body never leaks internals."""
    logger.error(
        "Unhandled error while serving request",
        extra={
            **_correlation(request),
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
        exc_info=exc,
    )
    problem = ProblemDetails(
        type="internal-error",
        title="Internal Server Error",
        status=500,
        detail="An unexpected error occurred while processing your request",
        instance=request.url.path,
    )
    return _problem_response(request, problem)


def configure_exception_handlers(app: FastAPI) -> None:
    """Register the Problem Details handlers on ``app``.

    Example:
        app = FastAPI()
        configure_exception_handlers(app)
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
