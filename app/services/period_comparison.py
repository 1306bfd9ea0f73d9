"""
Period-over-period comparison

Splits a chronologically ascending series into a leading (earlier) half and
a trailing (recent) half and reports the percentage change between their sums.
"""
from decimal import Decimal, ROUND_FLOOR
from typing import Sequence, Union

from app.models.analytics import PeriodComparison, TimeBucket

Number = Union[int, float, Decimal]


def _round_half_up(value: Decimal) -> int:
    """Round to nearest integer, halves toward +infinity (-2.5 -> -2, 2.5 -> 3)"""
    return int((value + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def period_change(values: Sequence[Number]) -> int:
    """
    Percentage change of the trailing half over the leading half.

    leading = first floor(n/2) values, trailing = last ceil(n/2) values, so
    the middle value of an odd-length series counts toward the trailing half.
    Series shorter than two points return 0.
    """
    n = len(values)
    if n < 2:
        return 0

    leading_count = n // 2
    previous_sum = sum((Decimal(str(v)) for v in values[:leading_count]), Decimal("0"))
    current_sum = sum((Decimal(str(v)) for v in values[leading_count:]), Decimal("0"))

    if previous_sum == 0:
        return 100 if current_sum > 0 else 0
    return _round_half_up((current_sum - previous_sum) / previous_sum * 100)


def compare_series(series: Sequence[TimeBucket]) -> PeriodComparison:
    """Run period_change independently over views, bookings and revenue"""
    return PeriodComparison(
        views_change_pct=period_change([b.views for b in series]),
        bookings_change_pct=period_change([b.bookings for b in series]),
        revenue_change_pct=period_change([b.revenue for b in series]),
    )
