"""Logging infrastructure.

Structured logging with:
- JSONL format for log aggregation
- Automatic context injection (request_id, user_id, etc.)
- QueueHandler + QueueListener for non-blocking I/O

Basic usage:
    from taskboard_service.infra.logging import set_log_context
    import logging

    logger = logging.getLogger(__name__)

    set_log_context(user_id="u-1")
    logger.info("Building digest")  # Automatically includes user_id
"""

from taskboard_service.infra.logging.config import (
    configure_logging,
    setup_logging,
    shutdown,
)
from taskboard_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from taskboard_service.infra.logging.formatters import JSONFormatter

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "clear_log_context",
    "configure_logging",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
