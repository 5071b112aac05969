"""Per-board property role resolution.

Boards define their own property schemas, so the properties that hold a
card's assignee, due date, status and priority are discovered per board by
matching the property type and a keyword in its display name.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from taskboard_service.features.boards.schemas import Board, PropertyDefinition


class PropertyRole(StrEnum):
    """Logical role a board property can play in the digest."""

    ASSIGNEE = "assignee"
    DUE_DATE = "due_date"
    STATUS = "status"
    PRIORITY = "priority"


# role -> (required property type, lowercase name keyword)
ROLE_MATCHERS: dict[PropertyRole, tuple[str, str]] = {
    PropertyRole.ASSIGNEE: ("person", "assign"),
    PropertyRole.DUE_DATE: ("date", "due"),
    PropertyRole.STATUS: ("select", "status"),
    PropertyRole.PRIORITY: ("select", "priority"),
}


@dataclass(frozen=True, slots=True)
class PropertyRoles:
    """Property identifiers resolved for one board; empty string when absent."""

    assignee: str = ""
    due_date: str = ""
    status: str = ""
    priority: str = ""

    def missing(self, *roles: PropertyRole) -> list[PropertyRole]:
        """Return the requested roles that no property fills."""
        return [role for role in roles if not getattr(self, role.value)]


def resolve_property_roles(definitions: tuple[PropertyDefinition, ...]) -> PropertyRoles:
    """Pick at most one property identifier per role.

    Definitions are scanned in order and the first one whose type matches
    and whose lowercased name contains the role keyword wins. A single
    definition may fill several roles.

    Args:
        definitions: The board's card property definitions, in schema order.

    Returns:
        The resolved roles.
    """
    found: dict[str, str] = {}
    for definition in definitions:
        name = definition.name.lower()
        for role, (prop_type, keyword) in ROLE_MATCHERS.items():
            if role.value in found:
                continue
            if definition.type == prop_type and keyword in name:
                found[role.value] = definition.id
    return PropertyRoles(**found)


def option_display_name(board: Board, property_id: str, option_id: str) -> str:
    """Map a stored option identifier to its display value.

    Falls back to ``option_id`` when the property or option is unknown or the
    option has no display value. An empty ``option_id`` (or no property)
    yields an empty string.
    """
    if not property_id or not option_id:
        return ""

    for definition in board.card_properties:
        if definition.id != property_id:
            continue
        for option in definition.options:
            if option.id == option_id and option.value:
                return option.value
    return option_id
