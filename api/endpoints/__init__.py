"""
Endpoint handlers for the gear generator API.
"""
from .health import router as health_router
from .gear import router as gear_router

__all__ = [
    'health_router',
    'gear_router',
]
