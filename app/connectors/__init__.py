"""Upstream connectors for the vendor analytics engine"""

from app.connectors.base_connector import BaseConnector
from app.connectors.vendor_analytics_connector import VendorAnalyticsConnector
from app.connectors.booking_connector import BookingConnector

__all__ = [
    "BaseConnector",
    "VendorAnalyticsConnector",
    "BookingConnector"
]
