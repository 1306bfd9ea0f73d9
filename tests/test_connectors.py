"""
Connector tests against a fake marketplace API (httpx.MockTransport).

Guards the mapping from HTTP outcomes onto the error taxonomy:
401 -> AuthExpired, other failures -> SourceUnavailable, bad bodies -> PartialData.
"""
import asyncio
from datetime import datetime
from decimal import Decimal

import httpx
import pytest

from app.connectors.booking_connector import BookingConnector
from app.connectors.vendor_analytics_connector import VendorAnalyticsConnector
from app.models.analytics import BookingRecord
from app.services.errors import AuthExpired, EmptyInput, PartialData, SourceUnavailable

BASE_URL = "http://marketplace.test/api"


def _run(coro):
    """Run an async coroutine in a sync test."""
    return asyncio.run(coro)


def _transport(handler):
    return httpx.MockTransport(handler)


class TestVendorAnalyticsConnector:

    def test_fetch_dashboard_sends_window_and_token(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["days"] = request.url.params.get("daysBack")
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={
                "summary": {"totalViews": 10, "totalBookings": 1, "totalRevenue": "99.90"},
                "dailyData": [{"dateKey": "2026-10-18", "dayLabel": "Oct 18", "views": 10}],
            })

        connector = VendorAnalyticsConnector(base_url=BASE_URL, token="abc", transport=_transport(handler))
        dashboard = _run(connector.fetch_dashboard("v-42", 30))

        assert seen == {"path": "/api/analytics/vendor/v-42/dashboard", "days": "30", "auth": "Bearer abc"}
        assert dashboard.total_revenue == Decimal("99.90")
        assert dashboard.daily[0].label == "Oct 18"
        assert connector.get_status()["request_count"] == 1

    def test_401_raises_auth_expired(self):
        connector = VendorAnalyticsConnector(
            base_url=BASE_URL, transport=_transport(lambda request: httpx.Response(401))
        )
        with pytest.raises(AuthExpired):
            _run(connector.fetch_dashboard("v-1", 7))

    def test_500_raises_source_unavailable(self):
        connector = VendorAnalyticsConnector(
            base_url=BASE_URL, transport=_transport(lambda request: httpx.Response(500))
        )
        with pytest.raises(SourceUnavailable) as exc_info:
            _run(connector.fetch_dashboard("v-1", 7))
        assert exc_info.value.status_code == 500
        assert connector.get_status()["error_count"] == 1

    def test_network_error_raises_source_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        connector = VendorAnalyticsConnector(base_url=BASE_URL, transport=_transport(handler))
        with pytest.raises(SourceUnavailable):
            _run(connector.fetch_dashboard("v-1", 7))

    def test_non_json_body_raises_partial_data(self):
        connector = VendorAnalyticsConnector(
            base_url=BASE_URL, transport=_transport(lambda request: httpx.Response(200, text="<html>"))
        )
        with pytest.raises(PartialData):
            _run(connector.fetch_dashboard("v-1", 7))


class TestBookingConnector:

    def test_merges_bookings_and_requests(self):
        def handler(request):
            assert request.url.path == "/api/bookings/vendor/v-9"
            return httpx.Response(200, json={
                "bookings": [{"BookingID": 1, "EventDate": "2026-10-01T18:00:00Z", "Status": "Paid", "TotalAmount": 400}],
                "requests": [{"requestId": "r-2", "createdAt": "2026-10-02", "status": "pending", "totalAmount": "50.25"}],
            })

        connector = BookingConnector(base_url=BASE_URL, transport=_transport(handler))
        records = _run(connector.fetch_bookings("v-9"))

        assert [r.id for r in records] == ["1", "r-2"]
        assert records[0].raw_status == "Paid"
        assert records[0].event_date == datetime(2026, 10, 1, 18, 0)
        assert records[1].event_date is None
        assert records[1].total_amount == Decimal("50.25")

    def test_empty_booking_list_raises_empty_input(self):
        connector = BookingConnector(base_url=BASE_URL, transport=_transport(
            lambda request: httpx.Response(200, json={"bookings": [], "requests": []})
        ))
        with pytest.raises(EmptyInput):
            _run(connector.fetch_bookings("v-9"))

    def test_review_list_not_a_list_raises_partial_data(self):
        connector = BookingConnector(base_url=BASE_URL, transport=_transport(
            lambda request: httpx.Response(200, json={"reviews": 3})
        ))
        with pytest.raises(PartialData):
            _run(connector.fetch_review_stats("v-9"))

    def test_review_stats(self):
        def handler(request):
            return httpx.Response(200, json={"reviews": [{"Rating": 5}, {"Rating": 4}]})

        connector = BookingConnector(base_url=BASE_URL, transport=_transport(handler))
        assert _run(connector.fetch_review_stats("v-1")) == (2, 4.5)

    def test_favorite_count(self):
        connector = BookingConnector(
            base_url=BASE_URL, transport=_transport(lambda request: httpx.Response(200, json={"count": 12}))
        )
        assert _run(connector.fetch_favorite_count("v-1")) == 12


class TestBookingRecordPayload:

    def test_pascal_case(self):
        record = BookingRecord.from_payload({
            "BookingID": 7, "EventDate": "2026-03-04", "CreatedAt": "2026-02-01T10:00:00",
            "Status": "Accepted", "TotalAmount": 120.5, "FullAmountPaid": True,
        })
        assert record.id == "7"
        assert record.relevant_date.isoformat() == "2026-03-04"
        assert record.fully_paid is True
        assert record.total_amount == Decimal("120.5")

    def test_missing_fields_default(self):
        record = BookingRecord.from_payload({})
        assert record.id is None
        assert record.relevant_date is None
        assert record.raw_status == ""
        assert record.total_amount == Decimal("0")
        assert record.fully_paid is False

    def test_offset_timestamp_converted_to_utc_date(self):
        record = BookingRecord.from_payload({"eventDate": "2026-03-04T23:30:00-05:00"})
        assert record.relevant_date.isoformat() == "2026-03-05"

    @pytest.mark.parametrize("flag,expected", [("false", False), ("0", False), ("True", True), (1, True), (0, False)])
    def test_fully_paid_string_flags(self, flag, expected):
        assert BookingRecord.from_payload({"FullAmountPaid": flag}).fully_paid is expected

    def test_non_finite_amount_is_zero(self):
        assert BookingRecord.from_payload({"TotalAmount": "NaN"}).total_amount == Decimal("0")
