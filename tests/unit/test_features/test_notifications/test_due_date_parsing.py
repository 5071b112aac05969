"""Tests for due-date parsing and the typed property value view."""

from __future__ import annotations

import pytest

from taskboard_service.features.notifications.values import (
    INT64_MAX,
    NO_DUE_DATE,
    PropertyValue,
    ValueKind,
    parse_due_date,
)


class TestParseDueDate:
    """Every accepted encoding resolves to epoch ms; everything else to 0."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (1700000000000.0, 1700000000000),
            (1700000000000, 1700000000000),
            (1700000000000.9, 1700000000000),
            ("1700000000000", 1700000000000),
            ('{"from": 1700000000000}', 1700000000000),
            ('{"from": "1700000000000"}', 1700000000000),
            ('{"from": 1700000000000.7, "to": 1800000000000}', 1700000000000),
            ({"from": 1700000000000}, 1700000000000),
            ("-5", -5),
            ("+42", 42),
        ],
    )
    def test_accepted_encodings(self, raw, expected):
        """Numbers truncate; numeric strings and envelopes resolve their value."""
        assert parse_due_date(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [
            "abc",
            "",
            "{not json",
            "{}",
            '{"to": 1700000000000}',
            '{"from": null}',
            '{"from": "soon"}',
            '{"from": true}',
            "1.5e12",
            " 1700000000000",
            "1700000000000 ",
            "99999999999999999999",
            "1" * 5000,
            '{"from": "' + "1" * 5000 + '"}',
            '{"a":' * 100_000 + "1" + "}" * 100_000,
            None,
            True,
            False,
            ["1700000000000"],
            float("nan"),
            float("inf"),
        ],
    )
    def test_unparseable_values_yield_sentinel(self, raw):
        """Unknown shapes, malformed JSON and non-numeric text are 0, never errors."""
        assert parse_due_date(raw) == NO_DUE_DATE

    def test_int64_bounds(self):
        """Values just inside int64 parse, values just outside do not."""
        assert parse_due_date(str(INT64_MAX)) == INT64_MAX
        assert parse_due_date(str(INT64_MAX + 1)) == NO_DUE_DATE
        assert parse_due_date(2**64) == NO_DUE_DATE


class TestPropertyValue:
    """Shape tagging and the per-field accessors."""

    @pytest.mark.parametrize(
        ("raw", "kind"),
        [
            (12, ValueKind.NUMBER),
            (1.5, ValueKind.NUMBER),
            ("user-1", ValueKind.STRING),
            ('{"from": 1}', ValueKind.DATE_ENVELOPE),
            ({"from": 1}, ValueKind.DATE_ENVELOPE),
            (["a", "b"], ValueKind.LIST),
            (True, ValueKind.UNKNOWN),
            (None, ValueKind.UNKNOWN),
        ],
    )
    def test_of_tags_shapes(self, raw, kind):
        assert PropertyValue.of(raw).kind is kind

    def test_lookup_missing_key_is_missing(self):
        """Absent keys and empty property ids are both reported as missing."""
        assert PropertyValue.lookup({"a": 1}, "b").is_missing
        assert PropertyValue.lookup({"a": 1}, "").is_missing
        assert not PropertyValue.lookup({"a": 1}, "a").is_missing

    def test_explicit_null_is_not_missing(self):
        """A stored null is present but unusable."""
        value = PropertyValue.lookup({"a": None}, "a")
        assert value.kind is ValueKind.UNKNOWN
        assert value.as_epoch_ms() == NO_DUE_DATE

    def test_as_text_only_for_plain_strings(self):
        assert PropertyValue.of("s-todo").as_text() == "s-todo"
        assert PropertyValue.of(["s-todo"]).as_text() == ""
        assert PropertyValue.of(3).as_text() == ""

    def test_as_ids_accepts_single_and_list_values(self):
        """A person value can be one id or a list of ids."""
        assert PropertyValue.of("user-1").as_ids() == ("user-1",)
        assert PropertyValue.of(["user-1", "user-2"]).as_ids() == ("user-1", "user-2")
        assert PropertyValue.of(["user-1", 7, None, ""]).as_ids() == ("user-1",)
        assert PropertyValue.of("").as_ids() == ()
        assert PropertyValue.of(7).as_ids() == ()
