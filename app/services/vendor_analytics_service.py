"""
Vendor analytics orchestration

Tries the upstream analytics dashboard first and degrades to local
aggregation of raw bookings when it fails. Either way the caller receives
the same AnalyticsResult shape, tagged with its source.
"""
from datetime import date, datetime, timezone
from typing import Optional

from app.config import get_settings
from app.connectors.booking_connector import BookingConnector
from app.connectors.vendor_analytics_connector import VendorAnalyticsConnector
from app.models.analytics import AdditionalMetrics, AnalyticsResult, ResolvedRange
from app.services.date_buckets import build_buckets, resolve_range
from app.services.errors import EmptyInput, PartialData, SourceUnavailable
from app.services.fallback_aggregator import compute_fallback
from app.services.period_comparison import compare_series
from app.services.primary_aggregator import build_primary_result
from app.utils.logger import log


class VendorAnalyticsService:
    """Service for the vendor performance dashboard"""

    def __init__(
        self,
        analytics_connector: Optional[VendorAnalyticsConnector] = None,
        booking_connector: Optional[BookingConnector] = None,
        token: Optional[str] = None,
    ):
        self.settings = get_settings()
        self.analytics_connector = analytics_connector or VendorAnalyticsConnector(token=token)
        self.booking_connector = booking_connector or BookingConnector(token=token)

    async def get_analytics(
        self,
        vendor_id: str,
        range_token: str,
        today: Optional[date] = None,
    ) -> AnalyticsResult:
        """
        Build the dashboard analytics for one vendor and range.

        Args:
            vendor_id: Vendor profile identifier
            range_token: One of 7d, 30d, 90d, 1y
            today: Anchor date for the bucket template (defaults to UTC today)

        Returns:
            AnalyticsResult with source 'primary' or 'fallback'

        Raises:
            InvalidRange: unknown range token
            AuthExpired: a source rejected the caller's token
        """
        resolved = resolve_range(range_token)
        anchor = today or datetime.now(timezone.utc).date()
        template = build_buckets(resolved.granularity, resolved.bucket_count, anchor)

        try:
            dashboard = await self.analytics_connector.fetch_dashboard(vendor_id, resolved.lookback_days)
            result = build_primary_result(
                dashboard,
                resolved,
                template,
                estimate_views=self.settings.enable_view_estimation,
            )
            log.info(f"Analytics for vendor {vendor_id} ({resolved.token}) served from primary source")
        except (SourceUnavailable, PartialData) as e:
            log.warning(f"Primary analytics failed for vendor {vendor_id}: {e.message}. Degrading to bookings")
            result = await self._fallback(vendor_id, resolved, template)

        result.comparison = compare_series(result.series)
        return result

    async def _fallback(self, vendor_id: str, resolved: ResolvedRange, template) -> AnalyticsResult:
        try:
            bookings = await self.booking_connector.fetch_bookings(vendor_id)
        except EmptyInput as e:
            log.info(f"{e.message}; returning an all-zero series")
            bookings = []
        except (SourceUnavailable, PartialData) as e:
            log.error(f"Booking fetch failed for vendor {vendor_id}: {e.message}; returning an all-zero series")
            bookings = []

        result = compute_fallback(bookings, resolved.granularity, template, range_token=resolved.token)
        if self.settings.fetch_additional_metrics:
            result.additional_metrics = await self._additional_metrics(vendor_id)
        log.info(
            f"Analytics for vendor {vendor_id} ({resolved.token}) computed from "
            f"{result.totals.bookings} bookings in degraded mode"
        )
        return result

    async def _additional_metrics(self, vendor_id: str) -> AdditionalMetrics:
        """Favorites and review stats, best effort; failures leave zeros"""
        metrics = AdditionalMetrics()
        try:
            metrics.favorite_count = await self.booking_connector.fetch_favorite_count(vendor_id)
        except (SourceUnavailable, PartialData) as e:
            log.warning(f"Favorites count unavailable for vendor {vendor_id}: {e.message}")
        try:
            metrics.review_count, metrics.avg_rating = await self.booking_connector.fetch_review_stats(vendor_id)
        except (SourceUnavailable, PartialData) as e:
            log.warning(f"Review stats unavailable for vendor {vendor_id}: {e.message}")
        return metrics
