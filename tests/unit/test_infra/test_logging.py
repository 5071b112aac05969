"""Tests for JSON log formatting and context injection."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from taskboard_service.infra.logging import (
    ContextInjectingFilter,
    JSONFormatter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)


@pytest.fixture(autouse=True)
def _clean_context():
    clear_log_context()
    yield
    clear_log_context()


def _record(msg: str = "Notification digest built", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="taskboard_service.features.notifications.service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_core_fields_and_extras(self):
        formatter = JSONFormatter(static={"service": "taskboard-service"})

        data = json.loads(formatter.format(_record(overdue=2, user_id="u-1")))

        assert data["level"] == "INFO"
        assert data["logger"] == "taskboard_service.features.notifications.service"
        assert data["message"] == "Notification digest built"
        assert data["service"] == "taskboard-service"
        assert data["overdue"] == 2
        assert data["user_id"] == "u-1"
        assert data["timestamp"].endswith("Z")
        assert "pathname" not in data
        assert "args" not in data

    def test_exception_is_single_line(self):
        formatter = JSONFormatter()
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()

        line = formatter.format(record)

        assert "\n" not in line
        assert "RuntimeError: boom" in json.loads(line)["exception"]

    def test_unserializable_extras_fall_back_to_str(self):
        formatter = JSONFormatter()

        data = json.loads(formatter.format(_record(scope=object())))

        assert data["scope"].startswith("<object object")


class TestLogContext:
    def test_set_get_remove(self):
        set_log_context(user_id="u-1", scope="assigned")
        remove_from_log_context("scope")

        assert get_log_context() == {"user_id": "u-1"}

    def test_filter_injects_context_without_overwriting(self):
        set_log_context(user_id="u-1", board_id="from-context")
        record = _record(board_id="explicit")

        assert ContextInjectingFilter().filter(record) is True
        assert record.user_id == "u-1"
        assert record.board_id == "explicit"
