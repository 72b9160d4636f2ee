# API endpoints and routers

from .auth_endpoints import router as auth_router
from .trips_endpoints import router as trips_router
from .packing_endpoints import router as packing_router
from .feedback_endpoints import router as feedback_router
from .health_endpoints import router as health_router

__all__ = [
    "auth_router",
    "trips_router",
    "packing_router",
    "feedback_router",
    "health_router",
]
