"""
Analytics data model

Plain dataclasses computed fresh per request. Nothing here is persisted.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from app.utils.helpers import parse_datetime, to_bool, to_decimal

# Granularities
DAILY = "daily"
MONTHLY = "monthly"

# Canonical booking statuses
STATUS_PENDING = "pending"
STATUS_CONFIRMED = "confirmed"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"
CANONICAL_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED, STATUS_COMPLETED, STATUS_CANCELLED)

# Result sources
SOURCE_PRIMARY = "primary"
SOURCE_FALLBACK = "fallback"


@dataclass(frozen=True)
class ResolvedRange:
    token: str
    granularity: str
    lookback_days: int
    bucket_count: int


@dataclass
class TimeBucket:
    """One day or one month of aggregated metrics"""
    key: str
    label: str
    views: int = 0
    bookings: int = 0
    revenue: Decimal = Decimal("0")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "views": self.views,
            "bookings": self.bookings,
            "revenue": float(self.revenue),
        }


@dataclass
class Totals:
    views: int = 0
    bookings: int = 0
    revenue: Decimal = Decimal("0")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "views": self.views,
            "bookings": self.bookings,
            "revenue": float(self.revenue),
        }


@dataclass
class PeriodComparison:
    """Trailing-half vs leading-half change, as rounded percentages"""
    views_change_pct: int = 0
    bookings_change_pct: int = 0
    revenue_change_pct: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "views_change_pct": self.views_change_pct,
            "bookings_change_pct": self.bookings_change_pct,
            "revenue_change_pct": self.revenue_change_pct,
        }


@dataclass
class AdditionalMetrics:
    conversion_rate: float = 0.0
    avg_response_time: float = 0.0
    favorite_count: int = 0
    review_count: int = 0
    avg_rating: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conversion_rate": self.conversion_rate,
            "avg_response_time": self.avg_response_time,
            "favorite_count": self.favorite_count,
            "review_count": self.review_count,
            "avg_rating": round(self.avg_rating, 2),
        }


@dataclass
class AnalyticsResult:
    """
    Unified analytics output.

    The field set is identical for primary and fallback results; only
    `source` tells them apart.
    """
    range: str
    granularity: str
    series: List[TimeBucket]
    status_breakdown: Dict[str, int]
    totals: Totals
    source: str
    comparison: PeriodComparison = field(default_factory=PeriodComparison)
    additional_metrics: AdditionalMetrics = field(default_factory=AdditionalMetrics)
    views_estimated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "range": self.range,
            "granularity": self.granularity,
            "source": self.source,
            "series": [b.to_dict() for b in self.series],
            "status_breakdown": dict(self.status_breakdown),
            "totals": self.totals.to_dict(),
            "comparison": self.comparison.to_dict(),
            "additional_metrics": self.additional_metrics.to_dict(),
            "views_estimated": self.views_estimated,
        }


@dataclass(frozen=True)
class BookingRecord:
    """Raw booking as returned by the marketplace booking list"""
    id: Optional[str]
    event_date: Optional[datetime]
    created_at: Optional[datetime]
    raw_status: str
    total_amount: Decimal
    fully_paid: bool = False

    @property
    def relevant_date(self) -> Optional[date]:
        """Event date when known, otherwise creation date"""
        moment = self.event_date or self.created_at
        return moment.date() if moment else None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "BookingRecord":
        """
        Map one booking-list entry onto a BookingRecord.

        The booking API mixes PascalCase (database columns) and camelCase
        (serialized DTOs); this is the only place that knows both spellings.
        """
        def pick(*names):
            for name in names:
                value = payload.get(name)
                if value is not None:
                    return value
            return None

        booking_id = pick("BookingID", "bookingId", "RequestID", "requestId", "id")
        return cls(
            id=str(booking_id) if booking_id is not None else None,
            event_date=parse_datetime(pick("EventDate", "eventDate")),
            created_at=parse_datetime(pick("CreatedAt", "createdAt")),
            raw_status=str(pick("Status", "status", "_status") or ""),
            total_amount=to_decimal(pick("TotalAmount", "totalAmount")),
            fully_paid=to_bool(pick("FullAmountPaid", "fullAmountPaid", "fullyPaid")),
        )
