"""
Range presets and time-bucket templates

Maps a dashboard range token to a granularity and builds the ordered,
gap-free bucket sequence both aggregators fill in. `bucket_key` is the one
key derivation shared by every code path.
"""
from datetime import date, timedelta
from typing import List, Optional, Tuple

from app.models.analytics import DAILY, MONTHLY, ResolvedRange, TimeBucket
from app.services.errors import InvalidRange

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# token -> (granularity, lookback_days, bucket_count)
# 90d is six trailing months anchored to the current month, not 90 days.
RANGE_PRESETS = {
    "7d": (DAILY, 7, 7),
    "30d": (DAILY, 30, 30),
    "90d": (MONTHLY, 90, 6),
    "1y": (MONTHLY, 365, 12),
}


def resolve_range(token: str) -> ResolvedRange:
    """Resolve a range token; unknown tokens raise InvalidRange (no default here)"""
    key = (token or "").strip().lower()
    if key not in RANGE_PRESETS:
        raise InvalidRange(token)
    granularity, lookback_days, bucket_count = RANGE_PRESETS[key]
    return ResolvedRange(
        token=key,
        granularity=granularity,
        lookback_days=lookback_days,
        bucket_count=bucket_count,
    )


def bucket_key(granularity: str, day: date) -> str:
    """ISO date for daily buckets, YYYY-MM for monthly buckets"""
    if granularity == DAILY:
        return day.isoformat()
    return f"{day.year:04d}-{day.month:02d}"


def bucket_label(granularity: str, day: date) -> str:
    """'Jan 5' for daily buckets, 'Jan' for monthly buckets"""
    if granularity == DAILY:
        return f"{MONTH_ABBR[day.month - 1]} {day.day}"
    return MONTH_ABBR[day.month - 1]


def _shift_month(day: date, months_back: int) -> date:
    """First day of the month `months_back` months before `day`'s month"""
    index = day.year * 12 + (day.month - 1) - months_back
    return date(index // 12, index % 12 + 1, 1)


def build_buckets(granularity: str, bucket_count: int, anchor_date: Optional[date] = None) -> List[TimeBucket]:
    """
    Build `bucket_count` empty buckets ending at `anchor_date`, oldest first.

    Daily walks back one calendar day at a time; monthly walks back one
    calendar month at a time starting from the anchor's month.
    """
    if granularity not in (DAILY, MONTHLY):
        raise ValueError(f"Unknown granularity: {granularity}")
    if anchor_date is None:
        anchor_date = date.today()

    buckets = []
    for offset in range(bucket_count - 1, -1, -1):
        if granularity == DAILY:
            day = anchor_date - timedelta(days=offset)
        else:
            day = _shift_month(anchor_date, offset)
        buckets.append(TimeBucket(key=bucket_key(granularity, day), label=bucket_label(granularity, day)))
    return buckets


def template_window(granularity: str, template: List[TimeBucket]) -> Optional[Tuple[date, date]]:
    """Inclusive first and last calendar day covered by a bucket template"""
    if not template:
        return None

    first_key = template[0].key
    last_key = template[-1].key
    if granularity == DAILY:
        return date.fromisoformat(first_key), date.fromisoformat(last_key)

    start = date(int(first_key[:4]), int(first_key[5:7]), 1)
    last_month_start = date(int(last_key[:4]), int(last_key[5:7]), 1)
    next_month_start = _shift_month(last_month_start, -1)
    return start, next_month_start - timedelta(days=1)
