"""
Routes package for API endpoints.

This module exports all route collections for the API.
"""
from highlight_backend.app.api.routes.status_routes import router as status_router
from highlight_backend.app.api.routes.highlight_routes import router as highlight_router

# Export all routers
__all__ = [
    "status_router",
    "highlight_router",
]
