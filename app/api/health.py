"""
Health check and status endpoints
"""
from fastapi import APIRouter
from datetime import datetime, timezone
from app.config import get_settings
from app.services.date_buckets import RANGE_PRESETS
from app import __version__

settings = get_settings()

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__
    }


@router.get("/status")
async def get_status():
    """Get system status"""
    return {
        "app_name": settings.app_name,
        "version": __version__,
        "environment": settings.environment,
        "upstream": settings.analytics_api_base_url,
        "ranges": sorted(RANGE_PRESETS),
        "default_range": settings.default_range,
        "features": {
            "view_estimation": settings.enable_view_estimation,
            "additional_metrics": settings.fetch_additional_metrics
        },
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
