"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from taskboard_service.app.exception_handlers import configure_exception_handlers
from taskboard_service.app.lifespan import lifespan
from taskboard_service.app.router import setup_routers
from taskboard_service.core.settings import get_app_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Settings are loaded once and cached via LRU cache.

    Returns:
        Configured FastAPI application instance.
    """
    app_settings = get_app_settings()
    docs_enabled = app_settings.docs_enabled

    app = FastAPI(
        title=app_settings.title,
        description=app_settings.description,
        version=app_settings.version,
        debug=app_settings.debug,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )

    # Exception handlers must be registered before routes are served
    configure_exception_handlers(app)
    setup_routers(app, app_settings)

    return app


def run() -> None:
    """Serve the application with uvicorn using APP_HOST/APP_PORT."""
    import uvicorn

    settings = get_app_settings()
    uvicorn.run(
        "taskboard_service.app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
