"""
Health Check Route

Health check endpoint for liveness probes, plus the plain-text banner.
"""

import time

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from api.models.responses import HealthResponse


router = APIRouter(tags=["health"])

_STARTED_AT = time.monotonic()

BANNER = (
    "Proof of Reserve API is running. Use /merkle-root to get the Merkle root "
    "or /merkle-proof/:userId to get the proof for a specific user."
)


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns service status and uptime for liveness probes.
    """
    return HealthResponse(
        ok=True,
        status="ok",
        service="proof-of-reserve-api",
        version="v1",
        uptime=time.monotonic() - _STARTED_AT,
    )


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Root endpoint - usage banner."""
    return BANNER
