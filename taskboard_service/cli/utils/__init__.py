"""CLI utilities for running async operations and formatting output."""

from taskboard_service.cli.utils.async_runner import coro
from taskboard_service.cli.utils.formatters import (
    error,
    header,
    info,
    section,
    warning,
)

__all__ = [
    "coro",
    "error",
    "header",
    "info",
    "section",
    "warning",
]
