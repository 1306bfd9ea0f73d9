"""
Vendor analytics dashboard connector
Fetches the pre-aggregated summary and per-period series for one vendor
"""
from dataclasses import dataclass, field
from decimal import Decimal
import math
from typing import Any, Dict, List

from app.connectors.base_connector import BaseConnector
from app.services.errors import PartialData
from app.utils.helpers import to_decimal, to_float, to_int
from app.utils.logger import log


@dataclass
class UpstreamPeriod:
    """One entry of dailyData or monthlyData"""
    key: str
    label: str
    views: int = 0
    bookings: int = 0
    revenue: Decimal = Decimal("0")


@dataclass
class UpstreamDashboard:
    """Canonical ingestion shape of the analytics dashboard payload"""
    total_views: int
    total_bookings: int
    total_revenue: Decimal
    conversion_rate: float = 0.0
    daily: List[UpstreamPeriod] = field(default_factory=list)
    monthly: List[UpstreamPeriod] = field(default_factory=list)
    status_counts: Dict[str, Any] = field(default_factory=dict)
    additional: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "UpstreamDashboard":
        """
        Validate and map the dashboard JSON.

        Raises PartialData for any block whose shape cannot be reshaped
        (missing summary, series that are not lists of objects, status or
        metrics blocks that are not objects, non-finite amounts).
        """
        if not isinstance(payload, dict) or not isinstance(payload.get("summary"), dict):
            raise PartialData("Analytics payload has no summary block")

        summary = payload["summary"]
        return cls(
            total_views=to_int(summary.get("totalViews")),
            total_bookings=to_int(summary.get("totalBookings")),
            total_revenue=_amount(summary.get("totalRevenue"), "totalRevenue"),
            conversion_rate=to_float(summary.get("conversionRate")),
            daily=_periods(payload.get("dailyData"), "dateKey", ("dayLabel", "dateLabel")),
            monthly=_periods(payload.get("monthlyData"), "monthKey", ("monthLabel",)),
            status_counts=_block(payload.get("bookingsByStatus"), "bookingsByStatus"),
            additional=_block(payload.get("additionalMetrics"), "additionalMetrics"),
        )


def _block(value: Any, name: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise PartialData(f"{name} is not an object")
    return value


def _amount(value: Any, name: str) -> Decimal:
    if isinstance(value, float) and not math.isfinite(value):
        raise PartialData(f"Non-finite {name} in analytics payload")
    return to_decimal(value)


def _periods(entries: Any, key_field: str, label_fields) -> List[UpstreamPeriod]:
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise PartialData(f"Series for {key_field} is not a list")

    periods = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise PartialData(f"Series entry is not an object: {entry!r}")
        key = entry.get(key_field)
        if not key:
            raise PartialData(f"Series entry without {key_field}")
        label = next((entry[f] for f in label_fields if entry.get(f)), "")
        periods.append(UpstreamPeriod(
            key=str(key),
            label=str(label),
            views=to_int(entry.get("views")),
            bookings=to_int(entry.get("bookings")),
            revenue=_amount(entry.get("revenue"), "revenue"),
        ))
    return periods


class VendorAnalyticsConnector(BaseConnector):
    """Connector for the marketplace analytics dashboard endpoint"""

    def __init__(self, **kwargs):
        super().__init__("Vendor Analytics", **kwargs)

    async def fetch_dashboard(self, vendor_id: str, days_back: int) -> UpstreamDashboard:
        """Single request for the vendor's dashboard over the last `days_back` days"""
        payload = await self._get_json(
            f"/analytics/vendor/{vendor_id}/dashboard",
            params={"daysBack": days_back},
        )
        dashboard = UpstreamDashboard.from_payload(payload)
        log.info(
            f"Fetched analytics for vendor {vendor_id}: "
            f"{len(dashboard.daily)} daily / {len(dashboard.monthly)} monthly entries"
        )
        return dashboard
