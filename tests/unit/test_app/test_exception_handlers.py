"""Tests for RFC 7807 exception handlers."""

from __future__ import annotations

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
import pytest

from taskboard_service.app.exception_handlers import configure_exception_handlers
from taskboard_service.core.exceptions import AppException, UnauthorizedException


@pytest.fixture
def app():
    app = FastAPI()
    configure_exception_handlers(app)

    @app.get("/conflict")
    async def conflict():
        raise AppException(
            status_code=409,
            detail="Digest already running",
            type="digest-conflict",
            extra={"user_id": "u-1"},
        )

    @app.get("/unauthorized")
    async def unauthorized():
        raise UnauthorizedException(detail="Bad token")

    @app.get("/boom")
    async def boom():
        msg = "secret internals"
        raise RuntimeError(msg)

    return app


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_app_exception_maps_to_problem_details(client):
    response = await client.get("/conflict", headers={"X-Request-Id": "req-1"})

    assert response.status_code == 409
    assert response.json() == {
        "type": "digest-conflict",
        "title": "Conflict",
        "status": 409,
        "detail": "Digest already running",
        "instance": "/conflict",
        "user_id": "u-1",
        "request_id": "req-1",
    }


@pytest.mark.asyncio
async def test_unauthorized_exception(client):
    response = await client.get("/unauthorized")

    assert response.status_code == 401
    assert response.json()["type"] == "unauthorized"
    assert response.json()["title"] == "Unauthorized"
    assert response.headers["WWW-Authenticate"] == "X-User-Id"


@pytest.mark.asyncio
async def test_unexpected_exception_hides_details(client):
    response = await client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["type"] == "internal-error"
    assert "secret internals" not in response.text
