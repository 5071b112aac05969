"""Time-bucket classification and relative time formatting.

All arithmetic is plain integer duration math on epoch milliseconds.
"""

from __future__ import annotations

from enum import StrEnum

HOUR_MS = 3_600_000
DAY_MS = 86_400_000
WEEK_MS = 7 * DAY_MS


class DueBucket(StrEnum):
    """Where a pending card lands relative to now.

    Only the first three buckets are listed in the response; DUE_THIS_WEEK
    feeds a summary counter and LATER only counts as pending.
    """

    OVERDUE = "overdue"
    DUE_URGENT = "due_urgent"
    DUE_SOON = "due_soon"
    DUE_THIS_WEEK = "due_this_week"
    LATER = "later"


def classify(due_ms: int, now_ms: int) -> DueBucket:
    """Bucket a due date; horizons are inclusive, first match wins."""
    diff = due_ms - now_ms
    if diff < 0:
        return DueBucket.OVERDUE
    if diff <= HOUR_MS:
        return DueBucket.DUE_URGENT
    if diff <= DAY_MS:
        return DueBucket.DUE_SOON
    if diff <= WEEK_MS:
        return DueBucket.DUE_THIS_WEEK
    return DueBucket.LATER


def format_time_to_go(due_ms: int, now_ms: int) -> str:
    """Render the distance to a due date.

    Examples: "3 days overdue", "2 hours overdue", "overdue", "in 4 days",
    "in 5 hours", "less than 1 hour".
    """
    diff = due_ms - now_ms

    if diff < 0:
        overdue = -diff
        if overdue >= DAY_MS:
            return f"{overdue // DAY_MS} days overdue"
        if overdue >= HOUR_MS:
            return f"{overdue // HOUR_MS} hours overdue"
        return "overdue"

    if diff >= DAY_MS:
        return f"in {diff // DAY_MS} days"
    if diff >= HOUR_MS:
        return f"in {diff // HOUR_MS} hours"
    return "less than 1 hour"
