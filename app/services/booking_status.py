"""
Booking status normalization

Every status count in the engine goes through normalize_status so the
primary and fallback paths cannot drift apart on category membership.
"""
from typing import Any, Dict, Mapping, Optional

from app.models.analytics import (
    CANONICAL_STATUSES,
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_CONFIRMED,
    STATUS_PENDING,
)
from app.utils.helpers import to_int

COMPLETED_STATUSES = frozenset({"paid", "completed"})
CONFIRMED_STATUSES = frozenset({"confirmed", "accepted", "approved"})
CANCELLED_STATUSES = frozenset({"cancelled", "declined"})


def normalize_status(raw_status: Optional[str], fully_paid: bool = False) -> str:
    """
    Map a raw booking status onto the canonical taxonomy.

    A fully paid booking is completed whatever its status string says.
    Unrecognized statuses count as pending rather than disappearing from
    the breakdown.
    """
    status = (raw_status or "").strip().lower()

    if fully_paid or status in COMPLETED_STATUSES:
        return STATUS_COMPLETED
    if status in CONFIRMED_STATUSES:
        return STATUS_CONFIRMED
    if status in CANCELLED_STATUSES:
        return STATUS_CANCELLED
    return STATUS_PENDING


def empty_breakdown() -> Dict[str, int]:
    return {status: 0 for status in CANONICAL_STATUSES}


def count_statuses(raw_counts: Optional[Mapping[str, Any]]) -> Dict[str, int]:
    """Fold an upstream {raw_status: count} block into canonical counts"""
    breakdown = empty_breakdown()
    for raw_status, count in (raw_counts or {}).items():
        breakdown[normalize_status(raw_status)] += to_int(count)
    return breakdown
