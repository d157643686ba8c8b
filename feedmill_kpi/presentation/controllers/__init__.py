"""
Controllers Package - Presentation Layer

FastAPI routers mapping HTTP requests onto the dashboard use cases and
domain errors onto HTTP status codes.
"""

from .dashboard_controller import router as dashboard_router
from .system_controller import router as system_router

__all__ = ["dashboard_router", "system_router"]
