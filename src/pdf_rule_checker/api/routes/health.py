"""
Health endpoint.

  GET /health -- Liveness probe (always returns 200 if process is alive)
"""

import logging
import time

from fastapi import APIRouter, Request

from ... import __version__
from ..models.responses import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def liveness(request: Request) -> HealthResponse:
    """Liveness probe -- returns 200 if the process is running."""
    start_time = getattr(request.app.state, "start_time", time.time())
    return HealthResponse(
        status="healthy",
        version=__version__,
        model=request.app.state.settings.model,
        uptime_seconds=round(time.time() - start_time, 1),
    )
