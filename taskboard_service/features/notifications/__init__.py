"""Due-date notifications feature.

Builds a read-only digest of a user's pending cards:

    from taskboard_service.features.notifications import (
        NotificationDigestService,
        parse_due_date,
    )

    service = NotificationDigestService(source)
    result = await service.build_digest("user-1")
    result.response.overdue
"""

from taskboard_service.features.notifications.classifier import (
    DAY_MS,
    HOUR_MS,
    DueBucket,
    classify,
    format_time_to_go,
)
from taskboard_service.features.notifications.properties import (
    PropertyRole,
    PropertyRoles,
    option_display_name,
    resolve_property_roles,
)
from taskboard_service.features.notifications.router import router
from taskboard_service.features.notifications.schemas import (
    BoardDiagnostic,
    DiagnosticReason,
    DigestResult,
    DigestStats,
    NotificationResponse,
    NotificationSummary,
    TaskNotification,
)
from taskboard_service.features.notifications.service import (
    NotificationDigestService,
    current_epoch_ms,
)
from taskboard_service.features.notifications.values import (
    NO_DUE_DATE,
    PropertyValue,
    ValueKind,
    parse_due_date,
)

__all__ = [
    "DAY_MS",
    "HOUR_MS",
    "NO_DUE_DATE",
    "BoardDiagnostic",
    "DiagnosticReason",
    "DigestResult",
    "DigestStats",
    "DueBucket",
    "NotificationDigestService",
    "NotificationResponse",
    "NotificationSummary",
    "PropertyRole",
    "PropertyRoles",
    "PropertyValue",
    "TaskNotification",
    "ValueKind",
    "classify",
    "current_epoch_ms",
    "format_time_to_go",
    "option_display_name",
    "parse_due_date",
    "resolve_property_roles",
    "router",
]
