"""Date manipulation utilities"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, List, Optional


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative if end is earlier)"""
    return (end - start).days


def coerce_date(value: Any) -> Optional[date]:
    """
    Convert a stored date value to a calendar date.

    Accepts date, datetime (time part dropped) and ISO strings such as
    "2024-03-01" or "2024-03-01T10:30:00Z". Timezone-aware timestamps are
    converted to UTC before the date is taken, so the result does not depend
    on the driver's session timezone. Anything else returns None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return coerce_date(datetime.fromisoformat(text))
        except ValueError:
            pass
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None
