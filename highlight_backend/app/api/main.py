"""
Main entry point for the Phrase Highlight API.

This module builds and configures the FastAPI application: middleware, rate
limiting, routers and a last-resort exception handler that returns sanitized
error bodies.
"""

import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from highlight_backend.app import __version__
from highlight_backend.app.api.routes import status_router, highlight_router
from highlight_backend.app.api.routes.highlight_routes import limiter
from highlight_backend.app.utils.constant.constant import ALLOWED_ORIGINS
from highlight_backend.app.utils.logging.logger import log_info
from highlight_backend.app.utils.system_utils.error_handling import SecurityAwareErrorHandler


def _init_middlewares(app: FastAPI) -> None:
    """
    Initialize and add middleware components to the FastAPI application.

    Args:
        app (FastAPI): The FastAPI application instance.
    """
    cors_config = {
        "allow_origins": ALLOWED_ORIGINS,
        "allow_credentials": True,
        "allow_methods": ["POST", "GET"],
        "allow_headers": ["*"],
        "max_age": 600,  # Cache preflight requests for 10 minutes.
    }
    # In production, filter out localhost origins.
    if os.environ.get("ENVIRONMENT") == "production":
        cors_config["allow_origins"] = [
            origin for origin in ALLOWED_ORIGINS if not origin.startswith("http://localhost")
        ]
    app.add_middleware(CORSMiddleware, **cors_config)


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Anything that escaped a route is still answered without leaking details.
    err = SecurityAwareErrorHandler.handle_safe_error(exc, "api_unhandled", endpoint=str(request.url))
    return JSONResponse(status_code=err.get("status_code", 500), content=err)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured application.
    """
    app = FastAPI(
        title="Phrase Highlight API",
        version=__version__,
        description="API for locating reference phrases in PDF text layers and computing highlight regions.",
    )

    # Rate limiting state shared by the route decorators.
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)

    _init_middlewares(app)

    app.include_router(status_router, tags=["Status"])
    app.include_router(highlight_router, prefix="/highlight", tags=["Highlight"])

    log_info("[OK] Phrase Highlight API initialized")
    return app
