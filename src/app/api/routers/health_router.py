# app/api/routers/health_router.py

from fastapi import APIRouter, status
from typing import Dict, Any
from datetime import datetime, timezone

from infra.configs.app_config import settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Check if the API server is running.",
)
async def health_check() -> Dict[str, Any]:
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": settings.app_name,
        "version": settings.app_version,
    }
