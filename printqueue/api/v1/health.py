"""Health check endpoint."""

import platform
import sys

from fastapi import APIRouter

from printqueue.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Service health and backend configuration."""
    return {
        "status": "healthy",
        "store_backend": settings.store_backend,
        "supabase_configured": bool(settings.supabase_url),
        "python_version": sys.version,
        "platform": platform.platform(),
    }
