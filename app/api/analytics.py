"""
Vendor analytics API
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from app.config import get_settings
from app.services.errors import AuthExpired, InvalidRange
from app.services.vendor_analytics_service import VendorAnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"])

settings = get_settings()


def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None


def get_analytics_service(request: Request) -> VendorAnalyticsService:
    """Dependency: service bound to the caller's token for upstream calls"""
    return VendorAnalyticsService(token=_bearer_token(request))


@router.get("/vendor/{vendor_id}")
async def vendor_analytics(
    vendor_id: str,
    range: Optional[str] = Query(None, description="Lookback window: 7d, 30d, 90d or 1y"),
    service: VendorAnalyticsService = Depends(get_analytics_service),
):
    """Time-bucketed views/bookings/revenue, status breakdown and trend for one vendor."""
    try:
        result = await service.get_analytics(vendor_id, range or settings.default_range)
    except InvalidRange as e:
        raise HTTPException(status_code=400, detail=e.message)
    except AuthExpired as e:
        raise HTTPException(
            status_code=401,
            detail=e.message,
            headers={"X-Force-Logout": "true"},
        )
    return result.to_dict()
