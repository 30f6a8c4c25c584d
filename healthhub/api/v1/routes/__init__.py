"""
API v1 routes package.
"""

from .metric_routes import router as metric_router
from .provider_routes import router as provider_router
from .health_routes import router as health_router

__all__ = [
    "metric_router",
    "provider_router",
    "health_router"
]
