"""Pydantic schemas for the due-date notification digest.

Response models serialize with camelCase names (``dueUrgent``,
``totalPending``...) which is the wire format consumed by board clients.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import Field

from taskboard_service.core.schemas.base import CamelModel


class TaskNotification(CamelModel):
    """One pending card with a due date."""

    id: str = Field(description="Card identifier")
    title: str = Field(description="Card title")
    board_id: str = Field(description="Identifier of the board holding the card")
    board_title: str = Field(description="Title of the board holding the card")
    due_date: int = Field(description="Due date in epoch milliseconds")
    priority: str = Field(default="", description="Priority display name, empty when unset")
    status: str = Field(default="", description="Status display name, empty when unset")
    time_to_go: str = Field(description="Relative time, e.g. 'in 3 hours' or '2 days overdue'")


class NotificationSummary(CamelModel):
    """Counters over every pending card."""

    total_pending: int = Field(default=0, ge=0, description="Pending cards with a due date")
    due_today: int = Field(default=0, ge=0, description="Cards due within 24 hours")
    due_this_week: int = Field(
        default=0, ge=0, description="Cards due in more than 24 hours but within 7 days",
    )
    overdue_count: int = Field(default=0, ge=0, description="Cards past their due date")


class NotificationResponse(CamelModel):
    """Categorized due-date digest.

    Sequences keep board enumeration order, then card storage order.
    """

    overdue: list[TaskNotification] = Field(default_factory=list)
    due_urgent: list[TaskNotification] = Field(
        default_factory=list, description="Cards due within 1 hour",
    )
    due_soon: list[TaskNotification] = Field(
        default_factory=list, description="Cards due in more than 1 hour but within 24 hours",
    )
    summary: NotificationSummary = Field(default_factory=NotificationSummary)


class DiagnosticReason(StrEnum):
    """Why a board contributed nothing (or nothing more) to a digest."""

    BOARDS_UNAVAILABLE = "boards_unavailable"
    LISTING_FAILED = "listing_failed"
    MISSING_PROPERTIES = "missing_properties"
    DEADLINE_EXCEEDED = "deadline_exceeded"


class BoardDiagnostic(CamelModel):
    """A non-fatal problem met while scanning."""

    board_id: str | None = Field(default=None, description="Board concerned, None for the scan")
    reason: DiagnosticReason
    detail: str = ""


class DigestStats(CamelModel):
    """Scan counters that are reported but never part of the response body."""

    boards_scanned: int = 0
    cards_scanned: int = 0
    cards_matched: int = 0
    cards_unparseable: int = 0
    cards_closed: int = 0


@dataclass(frozen=True)
class DigestResult:
    """A digest plus the non-fatal diagnostics collected while building it.

    An empty response with diagnostics is a degraded but successful result.
    """

    response: NotificationResponse
    diagnostics: tuple[BoardDiagnostic, ...] = field(default=())
    stats: DigestStats = field(default_factory=DigestStats)

    @property
    def is_partial(self) -> bool:
        """True when a storage failure or deadline cut boards out of the scan."""
        return any(d.reason != DiagnosticReason.MISSING_PROPERTIES for d in self.diagnostics)
