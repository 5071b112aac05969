"""Board/card source collaborators.

The notification digest only reads boards and cards. Anything that can list
them implements the ``BoardSource`` protocol; storage-layer failures surface
as exceptions and are absorbed by the caller.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from taskboard_service.features.boards.schemas import Board, Card

logger = logging.getLogger(__name__)


class BoardSourceError(Exception):
    """Raised when a board source cannot produce boards or cards."""


class BoardSource(Protocol):
    """Protocol interface for read-only board/card storage.

    Uses structural typing so storage adapters need no common base class.
    """

    async def list_boards(self, user_id: str | None = None) -> list[Board]:
        """List boards reachable by ``user_id``, or every board when None."""
        ...

    async def list_cards(self, board_id: str) -> list[Card]:
        """List the blocks of one board in storage order."""
        ...


class InMemoryBoardSource:
    """Board source backed by in-process lists.

    Boards and cards keep their insertion order. ``members`` maps a board id
    to the users that can reach it; a board without an entry is reachable by
    nobody when listing for a specific user.

    Example:
        source = InMemoryBoardSource(
            boards=[board],
            cards=[card_a, card_b],
            members={board.id: {"u-1"}},
        )
        boards = await source.list_boards("u-1")
    """

    def __init__(
        self,
        boards: Iterable[Board] = (),
        cards: Iterable[Card] = (),
        members: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        self._boards: list[Board] = list(boards)
        self._cards: dict[str, list[Card]] = {}
        for card in cards:
            self._cards.setdefault(card.board_id, []).append(card)
        self._members: dict[str, frozenset[str]] = {
            board_id: frozenset(users) for board_id, users in (members or {}).items()
        }

    async def list_boards(self, user_id: str | None = None) -> list[Board]:
        if user_id is None:
            return list(self._boards)
        return [
            board for board in self._boards if user_id in self._members.get(board.id, frozenset())
        ]

    async def list_cards(self, board_id: str) -> list[Card]:
        return list(self._cards.get(board_id, []))

    @classmethod
    def from_export(cls, payload: Mapping[str, Any]) -> InMemoryBoardSource:
        """Build a source from a board export document.

        The document shape is ``{"boards": [...], "cards": [...], "members": {...}}``.

        Cards that fail validation are skipped one by one; a malformed card
        never hides the rest of its board.

        Raises:
            BoardSourceError: If the document or one of its boards does not validate.
        """
        if not isinstance(payload, Mapping):
            msg = "Board export must be a JSON object"
            raise BoardSourceError(msg)
        try:
            boards = [Board.model_validate(raw) for raw in payload.get("boards", [])]
            raw_cards = list(payload.get("cards", []))
        except (ValidationError, TypeError) as e:
            msg = f"Invalid board export: {e}"
            raise BoardSourceError(msg) from e

        cards: list[Card] = []
        for raw in raw_cards:
            try:
                cards.append(Card.model_validate(raw))
            except ValidationError as e:
                card_id = raw.get("id") if isinstance(raw, Mapping) else None
                logger.debug(
                    "Skipping malformed card in board export",
                    extra={"card_id": card_id, "error_count": e.error_count()},
                )

        members = payload.get("members") or {}
        if not isinstance(members, Mapping):
            msg = "Board export 'members' must be an object"
            raise BoardSourceError(msg)
        return cls(boards=boards, cards=cards, members=members)


class JsonFileBoardSource:
    """Board source reading a JSON board export from disk.

    The file is loaded lazily on first use and cached for the lifetime of
    the instance.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._delegate: InMemoryBoardSource | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> InMemoryBoardSource:
        if self._delegate is None:
            try:
                payload = json.loads(self._path.read_text(encoding="utf-8"))
            except (OSError, ValueError, RecursionError) as e:
                msg = f"Cannot read board export {self._path}: {e}"
                raise BoardSourceError(msg) from e
            self._delegate = InMemoryBoardSource.from_export(payload)
            logger.debug("Board export loaded", extra={"path": str(self._path)})
        return self._delegate

    async def list_boards(self, user_id: str | None = None) -> list[Board]:
        return await self._load().list_boards(user_id)

    async def list_cards(self, board_id: str) -> list[Card]:
        return await self._load().list_cards(board_id)
