"""Health Probe - liveness endpoint for container orchestration.

Invariants:
    - GET /api/health/ always returns 200 if process is up (liveness)
    - No upstream call: GitHub availability is not this service's health
"""

import logging
from fastapi import APIRouter, status

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])

SERVICE_NAME = "contributors-image-api"
SERVICE_VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }
