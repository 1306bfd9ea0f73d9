"""Data model for the vendor analytics engine"""

from app.models.analytics import (
    AdditionalMetrics,
    AnalyticsResult,
    BookingRecord,
    PeriodComparison,
    ResolvedRange,
    TimeBucket,
    Totals,
)

__all__ = [
    "AdditionalMetrics",
    "AnalyticsResult",
    "BookingRecord",
    "PeriodComparison",
    "ResolvedRange",
    "TimeBucket",
    "Totals",
]
