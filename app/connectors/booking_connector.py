"""
Marketplace booking connector
Fetches raw vendor bookings plus the favorites/reviews counts used in degraded mode
"""
from typing import List, Tuple

from app.connectors.base_connector import BaseConnector
from app.models.analytics import BookingRecord
from app.services.errors import EmptyInput, PartialData
from app.utils.helpers import to_float, to_int
from app.utils.logger import log


class BookingConnector(BaseConnector):
    """Connector for the vendor booking list and profile counters"""

    def __init__(self, **kwargs):
        super().__init__("Marketplace Bookings", **kwargs)

    async def fetch_bookings(self, vendor_id: str) -> List[BookingRecord]:
        """
        Confirmed bookings and open requests, merged into one list.

        Raises EmptyInput when the vendor has neither.
        """
        data = await self._get_json(f"/bookings/vendor/{vendor_id}")
        if isinstance(data, list):
            entries = data
        elif not isinstance(data, dict):
            raise PartialData("Booking list payload is not an object")
        else:
            bookings = data.get("bookings") or []
            requests = data.get("requests") or []
            if not isinstance(bookings, list) or not isinstance(requests, list):
                raise PartialData("Booking list payload has malformed bookings or requests")
            entries = bookings + requests

        records = [BookingRecord.from_payload(entry) for entry in entries if isinstance(entry, dict)]
        if not records:
            raise EmptyInput(f"No bookings for vendor {vendor_id}")
        log.info(f"Fetched {len(records)} raw bookings for vendor {vendor_id}")
        return records

    async def fetch_favorite_count(self, vendor_id: str) -> int:
        data = await self._get_json(f"/vendors/{vendor_id}/favorites/count")
        if not isinstance(data, dict):
            raise PartialData("Favorites count payload is not an object")
        return to_int(data.get("count"))

    async def fetch_review_stats(self, vendor_id: str) -> Tuple[int, float]:
        """(review_count, average_rating) from the vendor's review list"""
        data = await self._get_json(f"/vendors/{vendor_id}/reviews")
        if not isinstance(data, dict):
            raise PartialData("Reviews payload is not an object")
        reviews = data.get("reviews") or []
        if not isinstance(reviews, list):
            raise PartialData("Reviews payload has no review list")

        reviews = [r for r in reviews if isinstance(r, dict)]
        if not reviews:
            return 0, 0.0
        ratings = [to_float(r.get("Rating", r.get("rating"))) for r in reviews]
        return len(reviews), sum(ratings) / len(reviews)
