"""
Helper utilities
"""
from datetime import date, datetime, timezone
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from app.utils.logger import log


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Normalize the date formats the marketplace API emits to a naive UTC datetime.

    Accepts datetimes, dates, ISO strings (with or without time, 'Z' suffix or
    offset). Returns None for empty or unparseable input.
    """
    if not value:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            log.warning(f"Could not parse date: {value}")
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def to_decimal(value: Any) -> Decimal:
    """Coerce an amount to Decimal, treating missing/garbage/non-finite as zero"""
    if value is None or value == "":
        return Decimal("0")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")
    return amount if amount.is_finite() else Decimal("0")


def to_int(value: Any) -> int:
    """Coerce a count to int, treating missing/garbage as zero"""
    try:
        return int(value or 0)
    except (TypeError, ValueError, OverflowError):
        return 0


def to_float(value: Any) -> float:
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def to_bool(value: Any) -> bool:
    """Booleans arrive as JSON bools, 0/1 or strings like "false" """
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)
