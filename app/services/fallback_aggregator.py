"""
Fallback aggregation from raw booking records

Rebuilds the analytics shape locally when the upstream analytics endpoint is
down. Pure computation over bookings the caller already holds.

Known precision loss: there is no raw view-event data at this layer, so
views stay at zero in every bucket.
"""
from copy import deepcopy
from decimal import Decimal
from typing import Iterable, List

from app.models.analytics import (
    SOURCE_FALLBACK,
    STATUS_COMPLETED,
    AnalyticsResult,
    BookingRecord,
    Totals,
    TimeBucket,
)
from app.services.booking_status import empty_breakdown, normalize_status
from app.services.date_buckets import bucket_key, template_window
from app.utils.logger import log


def compute_fallback(
    bookings: Iterable[BookingRecord],
    granularity: str,
    template: List[TimeBucket],
    range_token: str = "",
) -> AnalyticsResult:
    """
    Bucket and sum raw bookings onto a copy of `template`.

    Bookings are placed by event date (creation date when the event date is
    missing). Revenue only counts for completed bookings with a non-negative
    amount; the booking count includes every booking in the window regardless
    of status.
    """
    series = deepcopy(template)
    by_key = {bucket.key: bucket for bucket in series}
    breakdown = empty_breakdown()
    window = template_window(granularity, series)

    in_window = 0
    undated = 0
    negative = 0
    for booking in bookings or []:
        day = booking.relevant_date
        if day is None:
            undated += 1
            continue
        if window is None or not (window[0] <= day <= window[1]):
            continue

        in_window += 1
        status = normalize_status(booking.raw_status, booking.fully_paid)
        breakdown[status] += 1

        bucket = by_key.get(bucket_key(granularity, day))
        if bucket is None:
            log.warning(
                f"Booking {booking.id} dated {day} matched no {granularity} bucket; dropped"
            )
            continue

        bucket.bookings += 1
        if status == STATUS_COMPLETED:
            if booking.total_amount < 0:
                negative += 1
            else:
                bucket.revenue += booking.total_amount

    if undated:
        log.debug(f"Skipped {undated} bookings with no event or creation date")
    if negative:
        log.warning(f"Ignored {negative} completed bookings with a negative amount")

    totals = Totals(
        views=0,
        bookings=sum(b.bookings for b in series),
        revenue=sum((b.revenue for b in series), Decimal("0")),
    )
    if totals.bookings != in_window:
        log.warning(f"Fallback bucketed {totals.bookings} of {in_window} in-window bookings")
    # booking volume counts every in-window record
    totals.bookings = in_window

    return AnalyticsResult(
        range=range_token,
        granularity=granularity,
        series=series,
        status_breakdown=breakdown,
        totals=totals,
        source=SOURCE_FALLBACK,
    )
