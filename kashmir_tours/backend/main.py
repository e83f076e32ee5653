"""
FastAPI Application Entry Point.

This is the main entry point for the ExploreKashmirTours backend.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kashmir_tours.backend.api import health
from kashmir_tours.backend.api.v1 import router as api_v1_router
from kashmir_tours.backend.core.config import get_app_config
from kashmir_tours.backend.core.database import dispose_engine
from kashmir_tours.backend.core.exception_handlers import register_exception_handlers
from kashmir_tours.backend.core.logging import get_logger, setup_logging
from kashmir_tours.backend.core.middleware import RequestContextMiddleware
from kashmir_tours.backend.core.startup_checks import run_startup_checks

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    app_config = get_app_config()
    setup_logging()

    if app_config.features.security_startup_checks_enabled:
        run_startup_checks()

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
        },
    )
    yield
    await dispose_engine()
    logger.info("Application shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app_config = get_app_config()
    app_settings = app_config.application
    cors_settings = app_config.security.cors

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.docs_enabled else None,
        redoc_url="/redoc" if app_settings.docs_enabled else None,
        openapi_url="/openapi.json" if app_settings.docs_enabled else None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)

    if app_settings.cors.origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors.origins,
            allow_credentials=True,
            allow_methods=cors_settings.allow_methods,
            allow_headers=cors_settings.allow_headers,
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=app_settings.api_prefix)

    return app


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    This function creates the app on first call and caches it.
    Use this instead of importing `app` directly to avoid
    import-time configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn kashmir_tours.backend.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
