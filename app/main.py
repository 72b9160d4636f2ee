"""
FastAPI application setup for the PackPal backend.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from contextlib import asynccontextmanager

from app.config.settings import get_settings
from app.core.db import create_tables, engine
from app.core.error_handlers import setup_error_handlers
from app.core.logging import configure_logging
from app.middleware import RequestContextMiddleware
from app.api import (
    auth_router,
    trips_router,
    packing_router,
    feedback_router,
    health_router,
)

# Get application settings
settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: configure logging and, when enabled, create missing tables.
    Shutdown: dispose of the database engine.
    """
    configure_logging(settings.log_level.value, settings.log_format)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    if settings.database.create_all:
        await create_tables()
        logger.info("Database tables ensured")

    try:
        yield
    finally:
        logger.info("Shutting down application")
        await engine.dispose()


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(CORSMiddleware, **settings.get_cors_config())
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(trips_router)
    app.include_router(packing_router)
    app.include_router(feedback_router)

    return app


app = create_app()
