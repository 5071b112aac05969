"""Pytest configuration and shared fixtures.

Organization:
    - Environment: settings isolation for every test
    - Board Fixtures: board/card factories with a realistic property schema
    - Source Fixtures: in-memory board sources and JSON board exports

Board factories build the schema most boards use in the wild::

    Assigned To (person)  Due Date (date)  Status (select)  Priority (select)

Tests that need a different schema pass explicit ``PropertyDefinition``s.
"""

from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING, Any

import pytest

from taskboard_service.core.settings import clear_all_settings_cache
from taskboard_service.features.boards.schemas import (
    Board,
    Card,
    PropertyDefinition,
    PropertyOption,
)
from taskboard_service.features.boards.source import InMemoryBoardSource

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

# Keep tests independent from any local .env board export
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_FILE_ENABLED", "false")

NOW_MS = 1_700_000_000_000
HOUR_MS = 3_600_000
DAY_MS = 86_400_000

ASSIGNEE_PROP = "p-assignee"
DUE_PROP = "p-due"
STATUS_PROP = "p-status"
PRIORITY_PROP = "p-priority"

STATUS_OPTIONS = (
    PropertyOption(id="s-todo", value="Not Started"),
    PropertyOption(id="s-progress", value="In Progress"),
    PropertyOption(id="s-done", value="Completed 🙌"),
    PropertyOption(id="s-archived", value="Archived"),
    PropertyOption(id="s-blank", value=""),
)
PRIORITY_OPTIONS = (
    PropertyOption(id="pr-high", value="1. High 🔥"),
    PropertyOption(id="pr-low", value="3. Low"),
)


# ============================================================================
# Environment
# ============================================================================


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop cached settings and board sources around every test."""
    from taskboard_service.features.notifications.dependencies import get_board_source

    monkeypatch.delenv("NOTIFY_DATA_FILE", raising=False)
    clear_all_settings_cache()
    get_board_source.cache_clear()
    yield
    clear_all_settings_cache()
    get_board_source.cache_clear()


# ============================================================================
# Board Fixtures
# ============================================================================


def standard_properties(
    *,
    assignee: bool = True,
    due: bool = True,
    status: bool = True,
    priority: bool = True,
) -> tuple[PropertyDefinition, ...]:
    """Property schema of a typical task board, optionally missing some roles."""
    definitions: list[PropertyDefinition] = []
    if status:
        definitions.append(
            PropertyDefinition(id=STATUS_PROP, name="Status", type="select", options=STATUS_OPTIONS),
        )
    if priority:
        definitions.append(
            PropertyDefinition(
                id=PRIORITY_PROP, name="Priority", type="select", options=PRIORITY_OPTIONS,
            ),
        )
    if assignee:
        definitions.append(PropertyDefinition(id=ASSIGNEE_PROP, name="Assigned To", type="person"))
    if due:
        definitions.append(PropertyDefinition(id=DUE_PROP, name="Due Date", type="date"))
    return tuple(definitions)


@pytest.fixture
def now_ms() -> int:
    """Fixed reference time for reproducible digests."""
    return NOW_MS


@pytest.fixture
def make_board() -> Callable[..., Board]:
    """Factory for boards with the standard property schema."""

    def _make(board_id: str = "board-1", title: str = "Sprint", **roles: bool) -> Board:
        return Board(id=board_id, title=title, card_properties=standard_properties(**roles))

    return _make


@pytest.fixture
def make_card() -> Callable[..., Card]:
    """Factory for cards using the standard property identifiers.

    ``due`` is stored as-is so tests can exercise every encoding; pass
    ``properties`` to replace the whole property map.
    """

    def _make(
        card_id: str,
        *,
        board_id: str = "board-1",
        title: str | None = None,
        due: Any = None,
        assignee: Any = "user-1",
        status: str | None = None,
        priority: str | None = None,
        **extra: Any,
    ) -> Card:
        properties: dict[str, Any] = {}
        if assignee is not None:
            properties[ASSIGNEE_PROP] = assignee
        if due is not None:
            properties[DUE_PROP] = due
        if status is not None:
            properties[STATUS_PROP] = status
        if priority is not None:
            properties[PRIORITY_PROP] = priority
        fields: dict[str, Any] = {
            "id": card_id,
            "title": title or f"Card {card_id}",
            "board_id": board_id,
            "properties": properties,
        }
        fields.update(extra)
        return Card.model_validate(fields)

    return _make


# ============================================================================
# Source Fixtures
# ============================================================================


@pytest.fixture
def board_export(now_ms: int) -> dict[str, Any]:
    """A small board export document in storage (camelCase) shape."""
    return {
        "boards": [
            {
                "id": "board-1",
                "title": "Sprint",
                "cardProperties": [
                    p.model_dump(by_alias=True) for p in standard_properties()
                ],
            },
            {"id": "board-2", "title": "Notes", "cardProperties": []},
        ],
        "cards": [
            {
                "id": "card-late",
                "title": "Ship release",
                "boardId": "board-1",
                "type": "card",
                "fields": {
                    "properties": {
                        ASSIGNEE_PROP: "user-1",
                        DUE_PROP: json.dumps({"from": now_ms - 2 * DAY_MS}),
                        STATUS_PROP: "s-progress",
                        PRIORITY_PROP: "pr-high",
                    },
                },
            },
            {
                "id": "card-soon",
                "title": "Write notes",
                "boardId": "board-1",
                "type": "card",
                "fields": {
                    "properties": {
                        ASSIGNEE_PROP: "user-1",
                        DUE_PROP: str(now_ms + 3 * HOUR_MS),
                    },
                },
            },
        ],
        "members": {"board-1": ["user-1"], "board-2": ["user-1"]},
    }


@pytest.fixture
def board_export_file(tmp_path: Path, board_export: dict[str, Any]) -> Path:
    """The board export written to a temporary JSON file."""
    path = tmp_path / "boards.json"
    path.write_text(json.dumps(board_export), encoding="utf-8")
    return path


@pytest.fixture
def empty_source() -> InMemoryBoardSource:
    """A board source with no boards at all."""
    return InMemoryBoardSource()
