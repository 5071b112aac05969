"""Shared Pydantic schemas."""

from taskboard_service.core.schemas.base import CamelModel, CustomBase
from taskboard_service.core.schemas.problem_details import (
    FieldError,
    ProblemDetails,
    ValidationProblemDetails,
)

__all__ = [
    "CamelModel",
    "CustomBase",
    "FieldError",
    "ProblemDetails",
    "ValidationProblemDetails",
]
