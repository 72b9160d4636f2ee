"""
Health check endpoint.
"""

from fastapi import APIRouter
from datetime import datetime, timezone
import time

from app.config.settings import settings
from app.core.error_handlers import error_handler
from app.schemas.base import envelope

router = APIRouter(prefix="/api", tags=["health"])

# Application start time for uptime calculation
_app_start_time = time.time()


@router.get("/health")
async def health_check():
    """Liveness probe with uptime and error counters since startup."""
    return envelope(
        "PackPal API is running!",
        version=settings.app_version,
        environment=settings.environment.value,
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime_seconds=round(time.time() - _app_start_time, 2),
        errors=error_handler.get_error_statistics(),
    )
