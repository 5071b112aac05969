"""Due-date notification digest service.

Scans board and card data to build a categorized digest of a user's pending
cards: overdue, due within an hour, due within a day, plus summary counters.
The scan is read-only and best effort: storage failures shrink the digest
and are reported as diagnostics, never raised.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from taskboard_service.features.notifications.classifier import (
    DueBucket,
    classify,
    format_time_to_go,
)
from taskboard_service.features.notifications.metrics import (
    notification_board_skipped_total,
    notification_bucket_total,
    notification_digest_duration_seconds,
    notification_digest_total,
)
from taskboard_service.features.notifications.properties import (
    PropertyRole,
    PropertyRoles,
    option_display_name,
    resolve_property_roles,
)
from taskboard_service.features.notifications.schemas import (
    BoardDiagnostic,
    DiagnosticReason,
    DigestResult,
    DigestStats,
    NotificationResponse,
    NotificationSummary,
    TaskNotification,
)
from taskboard_service.features.notifications.values import NO_DUE_DATE, PropertyValue

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from taskboard_service.core.settings.notifications import (
        NotificationSettings,
        ScanScope,
    )
    from taskboard_service.features.boards.schemas import Board, Card
    from taskboard_service.features.boards.source import BoardSource

logger = logging.getLogger(__name__)

DEFAULT_CLOSED_STATUS_KEYWORDS = ("complete", "done", "archive")

REQUIRED_ROLES: dict[str, tuple[PropertyRole, ...]] = {
    "assigned": (PropertyRole.ASSIGNEE, PropertyRole.DUE_DATE),
    "member": (PropertyRole.DUE_DATE,),
}


def current_epoch_ms() -> int:
    """Wall-clock time in epoch milliseconds, truncated to whole seconds."""
    return int(time.time()) * 1000


@dataclass
class _DigestAccumulator:
    """Mutable scan state; counters only ever grow."""

    overdue: list[TaskNotification] = field(default_factory=list)
    due_urgent: list[TaskNotification] = field(default_factory=list)
    due_soon: list[TaskNotification] = field(default_factory=list)
    total_pending: int = 0
    due_today: int = 0
    due_this_week: int = 0
    overdue_count: int = 0
    diagnostics: list[BoardDiagnostic] = field(default_factory=list)
    boards_scanned: int = 0
    cards_scanned: int = 0
    cards_matched: int = 0
    cards_unparseable: int = 0
    cards_closed: int = 0

    def add(self, notification: TaskNotification, bucket: DueBucket) -> None:
        match bucket:
            case DueBucket.OVERDUE:
                self.overdue.append(notification)
                self.overdue_count += 1
            case DueBucket.DUE_URGENT:
                self.due_urgent.append(notification)
                self.due_today += 1
            case DueBucket.DUE_SOON:
                self.due_soon.append(notification)
                self.due_today += 1
            case DueBucket.DUE_THIS_WEEK:
                self.due_this_week += 1
            case DueBucket.LATER:
                pass
        self.total_pending += 1
        notification_bucket_total.labels(bucket=bucket.value).inc()

    def skip_board(
        self, board_id: str | None, reason: DiagnosticReason, detail: str = "",
    ) -> None:
        self.diagnostics.append(BoardDiagnostic(board_id=board_id, reason=reason, detail=detail))
        notification_board_skipped_total.labels(reason=reason.value).inc()

    def build(self) -> DigestResult:
        return DigestResult(
            response=NotificationResponse(
                overdue=self.overdue,
                due_urgent=self.due_urgent,
                due_soon=self.due_soon,
                summary=NotificationSummary(
                    total_pending=self.total_pending,
                    due_today=self.due_today,
                    due_this_week=self.due_this_week,
                    overdue_count=self.overdue_count,
                ),
            ),
            diagnostics=tuple(self.diagnostics),
            stats=DigestStats(
                boards_scanned=self.boards_scanned,
                cards_scanned=self.cards_scanned,
                cards_matched=self.cards_matched,
                cards_unparseable=self.cards_unparseable,
                cards_closed=self.cards_closed,
            ),
        )


class NotificationDigestService:
    """Builds due-date notification digests from a board source.

    Property identifiers are resolved per board from the board's own schema.
    Two board scopes share the same scan:

    - ``assigned``: every board is scanned and only cards whose assignee
      property holds the user are kept. Boards without an assignee or a
      due-date property are skipped.
    - ``member``: only the user's boards are scanned, every card counts.
      Boards without a due-date property are skipped.

    Card listings are fetched concurrently (bounded by ``max_concurrency``)
    but merged strictly in board order, so output order is deterministic.

    Example:
        service = NotificationDigestService(source, scope="assigned")
        result = await service.build_digest("user-1", now_ms=1_700_000_000_000)
        result.response.summary.total_pending
    """

    def __init__(
        self,
        source: BoardSource,
        *,
        scope: ScanScope = "assigned",
        closed_status_keywords: Iterable[str] = DEFAULT_CLOSED_STATUS_KEYWORDS,
        max_concurrency: int = 8,
        timeout: float | None = None,
    ) -> None:
        """Initialize the digest service.

        Args:
            source: Board/card storage collaborator.
            scope: Board enumeration scope ("assigned" or "member").
            closed_status_keywords: Substrings marking a status display name as closed.
            max_concurrency: Maximum card listings fetched at once.
            timeout: Default deadline in seconds for a whole scan, None for no deadline.
        """
        if scope not in REQUIRED_ROLES:
            msg = f"Unknown scan scope: {scope!r}"
            raise ValueError(msg)
        if max_concurrency < 1:
            msg = "max_concurrency must be at least 1"
            raise ValueError(msg)
        self._source = source
        self._scope = scope
        self._closed_keywords = tuple(k.lower() for k in closed_status_keywords if k)
        self._max_concurrency = max_concurrency
        self._timeout = timeout

    @classmethod
    def from_settings(
        cls, source: BoardSource, settings: NotificationSettings,
    ) -> NotificationDigestService:
        """Create a service configured from NotificationSettings."""
        return cls(
            source,
            scope=settings.scope,
            closed_status_keywords=settings.closed_status_keywords,
            max_concurrency=settings.max_concurrency,
            timeout=settings.scan_timeout_seconds,
        )

    @property
    def scope(self) -> ScanScope:
        return self._scope

    async def get_notifications(
        self, user_id: str, *, now_ms: int | None = None,
    ) -> NotificationResponse:
        """Build a digest and return only the response body."""
        result = await self.build_digest(user_id, now_ms=now_ms)
        return result.response

    async def build_digest(
        self,
        user_id: str,
        *,
        now_ms: int | None = None,
        timeout: float | None = None,
    ) -> DigestResult:
        """Scan boards and categorize the user's pending cards.

        Args:
            user_id: The requesting user.
            now_ms: Reference time in epoch milliseconds. Defaults to the wall
                clock; pass a fixed value for reproducible output.
            timeout: Deadline in seconds for this scan. None uses the
                service default.

        Returns:
            The digest with any non-fatal diagnostics. Boards cut off by the
            deadline contribute nothing; finished boards are kept.
        """
        started = time.perf_counter()
        now = current_epoch_ms() if now_ms is None else now_ms
        budget = self._timeout if timeout is None else timeout
        deadline = None if budget is None else asyncio.get_running_loop().time() + budget
        acc = _DigestAccumulator()

        logger.info(
            "Building notification digest",
            extra={"user_id": user_id, "scope": self._scope, "now_ms": now},
        )

        boards = await self._list_boards(user_id, deadline, acc)
        plans = self._plan_boards(boards, acc)
        await self._scan_boards(plans, user_id, now, deadline, acc)

        result = acc.build()
        elapsed = time.perf_counter() - started
        notification_digest_total.labels(scope=self._scope).inc()
        notification_digest_duration_seconds.labels(scope=self._scope).observe(elapsed)

        summary = result.response.summary
        logger.info(
            "Notification digest built",
            extra={
                "user_id": user_id,
                "boards_scanned": result.stats.boards_scanned,
                "cards_scanned": result.stats.cards_scanned,
                "cards_matched": result.stats.cards_matched,
                "cards_closed": result.stats.cards_closed,
                "overdue": len(result.response.overdue),
                "due_urgent": len(result.response.due_urgent),
                "due_soon": len(result.response.due_soon),
                "total_pending": summary.total_pending,
                "diagnostics": len(result.diagnostics),
                "duration_ms": round(elapsed * 1000, 2),
            },
        )
        return result

    # ──────────────────────────────────────────────────────────────
    # Board enumeration
    # ──────────────────────────────────────────────────────────────

    async def _list_boards(
        self, user_id: str, deadline: float | None, acc: _DigestAccumulator,
    ) -> list[Board]:
        owner = None if self._scope == "assigned" else user_id
        try:
            async with asyncio.timeout_at(deadline):
                return await self._source.list_boards(owner)
        except TimeoutError:
            logger.warning("Board listing exceeded the scan deadline", extra={"user_id": user_id})
            acc.skip_board(None, DiagnosticReason.DEADLINE_EXCEEDED, "board listing timed out")
        except Exception as e:
            logger.warning(
                "Failed to list boards; returning empty digest",
                extra={"user_id": user_id, "error": str(e)},
            )
            acc.skip_board(None, DiagnosticReason.BOARDS_UNAVAILABLE, str(e))
        return []

    def _plan_boards(
        self, boards: list[Board], acc: _DigestAccumulator,
    ) -> list[tuple[Board, PropertyRoles]]:
        required = REQUIRED_ROLES[self._scope]
        plans: list[tuple[Board, PropertyRoles]] = []
        for board in boards:
            roles = resolve_property_roles(board.card_properties)
            missing = roles.missing(*required)
            if missing:
                logger.debug(
                    "Board lacks required properties",
                    extra={"board_id": board.id, "missing": [role.value for role in missing]},
                )
                acc.skip_board(
                    board.id,
                    DiagnosticReason.MISSING_PROPERTIES,
                    ", ".join(role.value for role in missing),
                )
                continue
            plans.append((board, roles))
        return plans

    # ──────────────────────────────────────────────────────────────
    # Card scan
    # ──────────────────────────────────────────────────────────────

    async def _scan_boards(
        self,
        plans: list[tuple[Board, PropertyRoles]],
        user_id: str,
        now_ms: int,
        deadline: float | None,
        acc: _DigestAccumulator,
    ) -> None:
        if not plans:
            return

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def fetch(board_id: str) -> list[Card]:
            async with semaphore:
                return await self._source.list_cards(board_id)

        tasks = [asyncio.create_task(fetch(board.id)) for board, _ in plans]
        pending: set[asyncio.Task[list[Card]]] = set()
        try:
            if deadline is None:
                await asyncio.wait(tasks)
            else:
                remaining = max(deadline - asyncio.get_running_loop().time(), 0)
                _, pending = await asyncio.wait(tasks, timeout=remaining)
        finally:
            unfinished = [task for task in tasks if not task.done()]
            for task in unfinished:
                task.cancel()
            if unfinished:
                await asyncio.gather(*unfinished, return_exceptions=True)

        # Merge in board order regardless of completion order
        for (board, roles), task in zip(plans, tasks, strict=True):
            if task in pending or task.cancelled():
                logger.warning(
                    "Card listing exceeded the scan deadline",
                    extra={"board_id": board.id},
                )
                acc.skip_board(board.id, DiagnosticReason.DEADLINE_EXCEEDED)
                continue
            error = task.exception()
            if error is not None:
                logger.warning(
                    "Failed to list cards for board",
                    extra={"board_id": board.id, "error": str(error)},
                )
                acc.skip_board(board.id, DiagnosticReason.LISTING_FAILED, str(error))
                continue
            acc.boards_scanned += 1
            self._scan_cards(board, roles, task.result(), user_id, now_ms, acc)

    def _scan_cards(
        self,
        board: Board,
        roles: PropertyRoles,
        cards: list[Card],
        user_id: str,
        now_ms: int,
        acc: _DigestAccumulator,
    ) -> None:
        for card in cards:
            if not card.is_active_card:
                continue
            acc.cards_scanned += 1

            properties = card.properties
            if properties is None:
                logger.debug("Card has no property map", extra={"card_id": card.id})
                continue

            if self._scope == "assigned":
                assignees = PropertyValue.lookup(properties, roles.assignee).as_ids()
                if user_id not in assignees:
                    continue
            acc.cards_matched += 1

            raw_due = PropertyValue.lookup(properties, roles.due_date)
            if raw_due.is_missing:
                continue
            due_ms = raw_due.as_epoch_ms()
            if due_ms == NO_DUE_DATE:
                acc.cards_unparseable += 1
                logger.debug(
                    "Could not parse due date",
                    extra={"card_id": card.id, "due_date_raw": repr(raw_due.raw)[:200]},
                )
                continue

            status = self._display_name(board, properties, roles.status)
            if self._is_closed(status):
                acc.cards_closed += 1
                continue

            notification = TaskNotification(
                id=card.id,
                title=card.title,
                board_id=card.board_id or board.id,
                board_title=board.title,
                due_date=due_ms,
                priority=self._display_name(board, properties, roles.priority),
                status=status,
                time_to_go=format_time_to_go(due_ms, now_ms),
            )
            acc.add(notification, classify(due_ms, now_ms))

    @staticmethod
    def _display_name(board: Board, properties: Mapping[str, Any], property_id: str) -> str:
        if not property_id:
            return ""
        option_id = PropertyValue.lookup(properties, property_id).as_text()
        return option_display_name(board, property_id, option_id)

    def _is_closed(self, status: str) -> bool:
        lowered = status.lower()
        return any(keyword in lowered for keyword in self._closed_keywords)
