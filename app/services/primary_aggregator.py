"""
Primary aggregation from the upstream analytics dashboard

Reshapes the upstream summary + per-period series onto the same bucket
template the fallback path fills, so both produce identical structures.
"""
from copy import deepcopy
from typing import List

from app.connectors.vendor_analytics_connector import UpstreamDashboard
from app.models.analytics import (
    DAILY,
    SOURCE_PRIMARY,
    AdditionalMetrics,
    AnalyticsResult,
    ResolvedRange,
    Totals,
    TimeBucket,
)
from app.services.booking_status import count_statuses
from app.utils.helpers import to_float, to_int
from app.utils.logger import log


def distribute_views(total_views: int, buckets: List[TimeBucket]) -> None:
    """
    Estimate per-bucket views from a period total (in place).

    NOT measured data: used only when upstream reports a total with no
    per-period breakdown. Bucket i of n gets weight 0.5 + 0.5 * i / n so
    recent buckets carry more; each takes the floor of its weighted share
    and the last bucket absorbs the remainder, keeping the sum exact.
    """
    n = len(buckets)
    if total_views <= 0 or n == 0:
        return

    weights = [0.5 + 0.5 * idx / n for idx in range(n)]
    weight_sum = sum(weights)

    assigned = 0
    for bucket, weight in zip(buckets[:-1], weights[:-1]):
        bucket.views = int(total_views * weight // weight_sum)
        assigned += bucket.views
    buckets[-1].views = total_views - assigned


def build_primary_result(
    dashboard: UpstreamDashboard,
    resolved: ResolvedRange,
    template: List[TimeBucket],
    estimate_views: bool = True,
) -> AnalyticsResult:
    """Project an upstream dashboard onto `template` and wrap it as a primary result"""
    periods = dashboard.daily if resolved.granularity == DAILY else dashboard.monthly
    series = deepcopy(template)
    by_key = {bucket.key: bucket for bucket in series}

    views_estimated = False
    if periods:
        dropped = 0
        for period in periods:
            bucket = by_key.get(period.key)
            if bucket is None:
                dropped += 1
                continue
            bucket.views += max(period.views, 0)
            bucket.bookings += max(period.bookings, 0)
            bucket.revenue += max(period.revenue, 0)
        if dropped:
            log.warning(f"Dropped {dropped} upstream {resolved.granularity} entries outside the {resolved.token} window")
    elif estimate_views and dashboard.total_views > 0:
        distribute_views(dashboard.total_views, series)
        views_estimated = True
        log.info(f"No per-period series upstream; estimated views across {len(series)} buckets")

    additional = dashboard.additional
    return AnalyticsResult(
        range=resolved.token,
        granularity=resolved.granularity,
        series=series,
        status_breakdown=count_statuses(dashboard.status_counts),
        totals=Totals(
            views=dashboard.total_views,
            bookings=dashboard.total_bookings,
            revenue=dashboard.total_revenue,
        ),
        source=SOURCE_PRIMARY,
        additional_metrics=AdditionalMetrics(
            conversion_rate=dashboard.conversion_rate,
            avg_response_time=to_float(additional.get("avgResponseTime")),
            favorite_count=to_int(additional.get("favoriteCount")),
            review_count=to_int(additional.get("reviewCount")),
            avg_rating=to_float(additional.get("avgRating")),
        ),
        views_estimated=views_estimated,
    )
