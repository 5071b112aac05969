"""Tests for the application factory and router wiring."""

from __future__ import annotations

from httpx import ASGITransport, AsyncClient
import pytest

from taskboard_service.app.main import create_app
from taskboard_service.core.settings import clear_all_settings_cache
from taskboard_service.features.boards.source import JsonFileBoardSource
from taskboard_service.features.notifications.dependencies import (
    get_board_source,
    get_notification_service,
)


@pytest.fixture
async def client():
    """Client bound to a freshly created application."""
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_liveness(client):
    response = await client.get("/health/live")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "alive"
    assert body["service"] == "taskboard-service"


@pytest.mark.asyncio
async def test_metrics_exposes_digest_counters(client, board_export_file, monkeypatch, now_ms):
    """Digest counters show up on /metrics after a request."""
    monkeypatch.setenv("NOTIFY_DATA_FILE", str(board_export_file))

    await client.get(
        "/api/v1/notifications", params={"now": now_ms}, headers={"X-User-Id": "user-1"},
    )
    response = await client.get("/metrics")

    assert response.status_code == 200
    assert "notification_digest_total" in response.text
    assert "notification_board_skipped_total" in response.text


@pytest.mark.asyncio
async def test_notifications_served_under_api_prefix(client, board_export_file, monkeypatch, now_ms):
    """Without overrides the service reads the configured board export."""
    monkeypatch.setenv("NOTIFY_DATA_FILE", str(board_export_file))

    response = await client.get(
        "/api/v1/notifications", params={"now": now_ms}, headers={"X-User-Id": "user-1"},
    )

    assert response.status_code == 200
    body = response.json()
    assert [item["id"] for item in body["overdue"]] == ["card-late"]
    assert [item["id"] for item in body["dueSoon"]] == ["card-soon"]


@pytest.mark.asyncio
async def test_notifications_without_board_source_are_empty(client, now_ms):
    response = await client.get(
        "/api/v1/notifications", params={"now": now_ms}, headers={"X-User-Id": "user-1"},
    )

    assert response.status_code == 200
    assert response.json()["summary"]["totalPending"] == 0


def test_docs_follow_settings(monkeypatch):
    monkeypatch.setenv("APP_DISABLE_DOCS", "true")
    clear_all_settings_cache()
    app = create_app()

    assert app.docs_url is None
    assert app.openapi_url is None


def test_services_share_the_cached_board_source(board_export_file, monkeypatch):
    """Each request gets a fresh service over one process-wide board source."""
    monkeypatch.setenv("NOTIFY_DATA_FILE", str(board_export_file))

    first = get_notification_service()
    second = get_notification_service()

    assert first is not second
    assert get_board_source() is get_board_source()
    assert isinstance(get_board_source(), JsonFileBoardSource)
    assert get_board_source().path == board_export_file
