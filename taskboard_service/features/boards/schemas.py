"""Pydantic models for board and card records read from storage.

Records are immutable and accept both camelCase (storage/JSON export) and
snake_case field names. Unknown storage fields are ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator, model_validator

from taskboard_service.core.schemas.base import CamelModel

CARD_TYPE = "card"


class PropertyOption(CamelModel):
    """One selectable value of a select/person property."""

    id: str
    value: str = ""
    color: str | None = None


class PropertyDefinition(CamelModel):
    """A board-schema property: identifier, display name, type tag and options."""

    id: str
    name: str = ""
    type: str = ""
    options: tuple[PropertyOption, ...] = ()


class Board(CamelModel):
    """A container of cards with a user-defined property schema."""

    id: str
    title: str = ""
    card_properties: tuple[PropertyDefinition, ...] = ()


class Card(CamelModel):
    """A task-like block on a board.

    ``properties`` maps property identifiers to dynamically typed values.
    It is None when the stored property map is missing or malformed.
    """

    id: str
    title: str = ""
    board_id: str = ""
    type: str = CARD_TYPE
    delete_at: int = 0
    properties: dict[str, Any] | None = Field(default=None)

    @model_validator(mode="before")
    @classmethod
    def _lift_fields_properties(cls, data: Any) -> Any:
        """Accept the storage block shape where properties live under ``fields``."""
        if isinstance(data, dict) and "properties" not in data:
            fields = data.get("fields")
            if isinstance(fields, dict) and "properties" in fields:
                return {**data, "properties": fields["properties"]}
        return data

    @field_validator("properties", mode="before")
    @classmethod
    def _drop_malformed_properties(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return None
        return v

    @property
    def is_active_card(self) -> bool:
        """True for non-deleted blocks of the card type."""
        return self.type == CARD_TYPE and self.delete_at == 0
