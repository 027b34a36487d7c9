"""
Health check endpoints.
"""

from typing import Dict
from fastapi import APIRouter, status
from datetime import datetime, timezone

from app.core.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> Dict[str, str]:
    """
    Basic health check endpoint.

    Returns 200 OK if the service is running.
    Use this for simple uptime monitoring and load balancer health checks.
    """
    return {
        "status": "healthy",
        "store": settings.STORE_BACKEND,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    }
