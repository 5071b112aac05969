"""Tests for per-board property role resolution."""

from __future__ import annotations

from taskboard_service.features.boards.schemas import Board, PropertyDefinition, PropertyOption
from taskboard_service.features.notifications.properties import (
    PropertyRole,
    PropertyRoles,
    option_display_name,
    resolve_property_roles,
)


def _definition(prop_id: str, name: str, prop_type: str) -> PropertyDefinition:
    return PropertyDefinition(id=prop_id, name=name, type=prop_type)


class TestResolvePropertyRoles:
    def test_standard_schema(self, make_board):
        """Type plus name keyword identifies each role."""
        roles = resolve_property_roles(make_board().card_properties)

        assert roles == PropertyRoles(
            assignee="p-assignee",
            due_date="p-due",
            status="p-status",
            priority="p-priority",
        )

    def test_keyword_match_is_case_insensitive_substring(self):
        roles = resolve_property_roles(
            (
                _definition("a", "REASSIGNED owner", "person"),
                _definition("d", "Overdue-by", "date"),
            ),
        )

        assert roles.assignee == "a"
        assert roles.due_date == "d"

    def test_type_must_match(self):
        """A text property named 'Due' is not a due date."""
        roles = resolve_property_roles(
            (
                _definition("t", "Due", "text"),
                _definition("s", "Status", "multiSelect"),
            ),
        )

        assert roles == PropertyRoles()

    def test_first_matching_definition_wins(self):
        roles = resolve_property_roles(
            (
                _definition("due-1", "Due Date", "date"),
                _definition("due-2", "Due (backup)", "date"),
            ),
        )

        assert roles.due_date == "due-1"

    def test_one_definition_can_fill_several_roles(self):
        """'Status priority' is both a status and a priority select."""
        roles = resolve_property_roles((_definition("sp", "Status priority", "select"),))

        assert roles.status == "sp"
        assert roles.priority == "sp"

    def test_missing_reports_unfilled_roles(self, make_board):
        roles = resolve_property_roles(make_board(assignee=False, due=False).card_properties)

        assert roles.missing(PropertyRole.ASSIGNEE, PropertyRole.DUE_DATE) == [
            PropertyRole.ASSIGNEE,
            PropertyRole.DUE_DATE,
        ]
        assert roles.missing(PropertyRole.STATUS) == []


class TestOptionDisplayName:
    def test_known_option(self, make_board):
        assert option_display_name(make_board(), "p-status", "s-progress") == "In Progress"

    def test_unknown_option_falls_back_to_identifier(self, make_board):
        assert option_display_name(make_board(), "p-status", "s-gone") == "s-gone"

    def test_empty_display_value_falls_back_to_identifier(self, make_board):
        assert option_display_name(make_board(), "p-status", "s-blank") == "s-blank"

    def test_unknown_property_falls_back_to_identifier(self, make_board):
        assert option_display_name(make_board(), "p-missing", "s-progress") == "s-progress"

    def test_empty_identifiers_yield_empty_string(self, make_board):
        board = make_board()
        assert option_display_name(board, "p-status", "") == ""
        assert option_display_name(board, "", "s-progress") == ""

    def test_options_are_scoped_to_their_property(self):
        """Option ids are only looked up under the requested property."""
        board = Board(
            id="b",
            card_properties=(
                PropertyDefinition(
                    id="one", name="Status", type="select",
                    options=(PropertyOption(id="x", value="Open"),),
                ),
                PropertyDefinition(
                    id="two", name="Priority", type="select",
                    options=(PropertyOption(id="x", value="High"),),
                ),
            ),
        )

        assert option_display_name(board, "two", "x") == "High"
