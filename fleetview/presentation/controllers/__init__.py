"""
Controllers Package - Presentation Layer

This package contains FastAPI controllers (routers) that handle
HTTP requests and responses. Controllers are responsible for
input validation, error handling, and mapping between API DTOs
and application layer use cases.
"""

from .fleet_controller import router as fleet_router
from .reports_controller import router as reports_router
from .system_controller import router as system_router
from .trends_controller import router as trends_router

__all__ = ["fleet_router", "reports_router", "system_router", "trends_router"]
