"""
Routers package for API endpoints.

This package contains all API route handlers organized by functionality.
"""

from .auth import router as auth_router
from .projects import router as projects_router
from .queue import router as queue_router
from .segments import router as segments_router
from .youtube import router as youtube_router

__all__ = [
    "auth_router",
    "projects_router",
    "queue_router",
    "segments_router",
    "youtube_router",
]
