"""
Range resolution and bucket template tests.

Guards against:
1. Wrong granularity/bucket count per range token
2. Gaps, duplicates or ordering errors in bucket templates
3. Month arithmetic across year boundaries
"""
from datetime import date

import pytest

from app.models.analytics import DAILY, MONTHLY
from app.services.date_buckets import (
    RANGE_PRESETS,
    bucket_key,
    bucket_label,
    build_buckets,
    resolve_range,
    template_window,
)
from app.services.errors import InvalidRange


ANCHOR = date(2026, 3, 2)


class TestResolveRange:

    @pytest.mark.parametrize("token,granularity,lookback,count", [
        ("7d", DAILY, 7, 7),
        ("30d", DAILY, 30, 30),
        ("90d", MONTHLY, 90, 6),
        ("1y", MONTHLY, 365, 12),
    ])
    def test_presets(self, token, granularity, lookback, count):
        resolved = resolve_range(token)
        assert resolved.granularity == granularity
        assert resolved.lookback_days == lookback
        assert resolved.bucket_count == count

    def test_token_is_trimmed_and_case_insensitive(self):
        assert resolve_range(" 1Y ").token == "1y"

    @pytest.mark.parametrize("token", ["14d", "", None, "all"])
    def test_unknown_token_raises(self, token):
        """No silent default to 30d at this layer."""
        with pytest.raises(InvalidRange):
            resolve_range(token)


class TestBuildBuckets:

    @pytest.mark.parametrize("token", sorted(RANGE_PRESETS))
    def test_length_and_strictly_increasing_keys(self, token):
        resolved = resolve_range(token)
        buckets = build_buckets(resolved.granularity, resolved.bucket_count, ANCHOR)
        keys = [b.key for b in buckets]
        assert len(buckets) == resolved.bucket_count
        assert len(set(keys)) == len(keys)
        assert keys == sorted(keys)
        assert all(b.views == 0 and b.bookings == 0 and b.revenue == 0 for b in buckets)

    def test_daily_walks_back_across_month_end(self):
        buckets = build_buckets(DAILY, 7, ANCHOR)
        assert [b.key for b in buckets] == [
            "2026-02-24", "2026-02-25", "2026-02-26", "2026-02-27",
            "2026-02-28", "2026-03-01", "2026-03-02",
        ]
        assert buckets[0].label == "Feb 24"
        assert buckets[-1].label == "Mar 2"

    def test_monthly_crosses_year_boundary(self):
        buckets = build_buckets(MONTHLY, 6, ANCHOR)
        assert [b.key for b in buckets] == [
            "2025-10", "2025-11", "2025-12", "2026-01", "2026-02", "2026-03",
        ]
        assert [b.label for b in buckets] == ["Oct", "Nov", "Dec", "Jan", "Feb", "Mar"]

    def test_twelve_months_ends_on_anchor_month(self):
        buckets = build_buckets(MONTHLY, 12, date(2026, 12, 31))
        assert buckets[0].key == "2026-01"
        assert buckets[-1].key == "2026-12"

    def test_unknown_granularity(self):
        with pytest.raises(ValueError):
            build_buckets("weekly", 4, ANCHOR)


def test_bucket_key_and_label():
    d = date(2026, 1, 5)
    assert bucket_key(DAILY, d) == "2026-01-05"
    assert bucket_key(MONTHLY, d) == "2026-01"
    assert bucket_label(DAILY, d) == "Jan 5"
    assert bucket_label(MONTHLY, d) == "Jan"


def test_template_window_daily():
    buckets = build_buckets(DAILY, 30, ANCHOR)
    assert template_window(DAILY, buckets) == (date(2026, 2, 1), ANCHOR)


def test_template_window_monthly_covers_whole_last_month():
    buckets = build_buckets(MONTHLY, 6, ANCHOR)
    assert template_window(MONTHLY, buckets) == (date(2025, 10, 1), date(2026, 3, 31))


def test_template_window_empty():
    assert template_window(DAILY, []) is None
