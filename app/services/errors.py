"""
Error taxonomy for the analytics engine

Only InvalidRange and AuthExpired reach the caller. The rest are absorbed by
VendorAnalyticsService, which degrades to the fallback path or an all-zero result.
"""
from typing import Optional


class AnalyticsError(Exception):
    """Base class for analytics engine errors"""
    def __init__(self, message, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class InvalidRange(AnalyticsError):
    """Range token outside 7d/30d/90d/1y"""
    def __init__(self, token):
        self.token = token
        super().__init__(f"Invalid range token: {token!r}", status_code=400)


class SourceUnavailable(AnalyticsError):
    """Network or HTTP failure talking to an upstream source"""


class PartialData(AnalyticsError):
    """Upstream answered but the payload cannot be reshaped"""


class AuthExpired(AnalyticsError):
    """Upstream rejected the caller's token (401). Signals a forced logout."""
    def __init__(self, message="Authentication expired"):
        super().__init__(message, status_code=401)


class EmptyInput(AnalyticsError):
    """No raw bookings available for the fallback path"""
