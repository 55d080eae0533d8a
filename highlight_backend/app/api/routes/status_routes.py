"""
Status endpoint for monitoring the phrase highlight service.
"""

import time

from fastapi import APIRouter, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from highlight_backend.app import __version__
from highlight_backend.app.api.models import StatusResponse
from highlight_backend.app.utils.constant.constant import SERVICE_NAME

# Create a rate limiter using the client's remote address.
limiter = Limiter(key_func=get_remote_address)

# Instantiate the API router.
router = APIRouter()


@router.get("/status", response_model=StatusResponse)
@limiter.limit("60/minute")
async def status(request: Request) -> StatusResponse:
    """
    Get a simple API status with current timestamp and version info.

    Parameters:
        request (Request): The incoming HTTP request.

    Returns:
        StatusResponse: Service name, version and timestamp.
    """
    return StatusResponse(status="ok", service=SERVICE_NAME, version=__version__, timestamp=time.time())
