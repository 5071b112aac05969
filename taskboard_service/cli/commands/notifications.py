"""Notification digest commands.

- digest      - Build a user's due-date digest from a JSON board export
- parse-date  - Resolve a raw due-date value to epoch milliseconds
"""

import json
import sys
from pathlib import Path

import click

from taskboard_service.cli.utils import coro, error, header, info, section, warning
from taskboard_service.core.settings import get_notification_settings
from taskboard_service.features.boards.source import JsonFileBoardSource
from taskboard_service.features.notifications.schemas import DigestResult, TaskNotification
from taskboard_service.features.notifications.service import NotificationDigestService
from taskboard_service.features.notifications.values import NO_DUE_DATE, parse_due_date


@click.group(name="notifications")
def notifications() -> None:
    """Due-date notification digest commands."""


@notifications.command(name="digest")
@click.option("--user", "user_id", required=True, help="User to build the digest for")
@click.option(
    "--data",
    "data_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON board export (defaults to NOTIFY_DATA_FILE)",
)
@click.option("--now", "now_ms", type=int, default=None, help="Reference time in epoch ms")
@click.option(
    "--scope",
    type=click.Choice(["assigned", "member"]),
    default=None,
    help="Board scope (defaults to NOTIFY_SCOPE)",
)
@click.option("--timeout", type=float, default=None, help="Scan deadline in seconds")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@coro
async def digest(
    user_id: str,
    data_file: Path | None,
    now_ms: int | None,
    scope: str | None,
    timeout: float | None,
    as_json: bool,
) -> None:
    """Build the due-date digest for USER from a board export."""
    settings = get_notification_settings()
    path = data_file or settings.data_file
    if path is None:
        error("No board export given; pass --data or set NOTIFY_DATA_FILE")
        sys.exit(1)

    if scope is not None:
        settings = settings.model_copy(update={"scope": scope})
    service = NotificationDigestService.from_settings(JsonFileBoardSource(path), settings)
    result = await service.build_digest(user_id, now_ms=now_ms, timeout=timeout)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "response": result.response.model_dump(mode="json", by_alias=True),
                    "diagnostics": [
                        d.model_dump(mode="json", by_alias=True) for d in result.diagnostics
                    ],
                    "stats": result.stats.model_dump(mode="json", by_alias=True),
                },
                indent=2,
            )
        )
        return

    _print_digest(user_id, result)


@notifications.command(name="parse-date")
@click.argument("value")
def parse_date(value: str) -> None:
    """Resolve a raw due-date VALUE (number, numeric string or {"from": ...})."""
    due_ms = parse_due_date(value)
    if due_ms == NO_DUE_DATE:
        error(f"Unparseable due date: {value}")
        sys.exit(1)
    click.echo(due_ms)


def _print_digest(user_id: str, result: DigestResult) -> None:
    response = result.response
    header(f"Notifications for {user_id}")

    for title, items in (
        ("Overdue", response.overdue),
        ("Due within 1 hour", response.due_urgent),
        ("Due within 24 hours", response.due_soon),
    ):
        section(f"{title} ({len(items)})")
        if not items:
            info("Nothing here")
        for item in items:
            click.echo(_format_notification(item))

    summary = response.summary
    section("Summary")
    click.echo(f"  Pending:        {summary.total_pending}")
    click.echo(f"  Due today:      {summary.due_today}")
    click.echo(f"  Due this week:  {summary.due_this_week}")
    click.echo(f"  Overdue:        {summary.overdue_count}")

    for diagnostic in result.diagnostics:
        target = diagnostic.board_id or "all boards"
        detail = f": {diagnostic.detail}" if diagnostic.detail else ""
        warning(f"{target} skipped ({diagnostic.reason}){detail}")


def _format_notification(item: TaskNotification) -> str:
    labels = ", ".join(label for label in (item.status, item.priority) if label)
    suffix = f" [{labels}]" if labels else ""
    return f"  • {item.title} ({item.board_title}) - {item.time_to_go}{suffix}"
