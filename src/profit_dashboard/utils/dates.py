"""Date helpers: backend timestamps to aware local datetimes, local day bounds."""

from __future__ import annotations

from datetime import datetime, timedelta
from email.utils import parsedate_to_datetime
from typing import Any

# Larger magnitudes are epoch milliseconds (1e11 seconds is past the year 5000).
_MILLIS_THRESHOLD = 100_000_000_000


def local_now() -> datetime:
    """Current time as an aware datetime in the local timezone."""
    return datetime.now().astimezone()


def _parse_text(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    # Flask's jsonify renders datetimes as RFC 2822 ("Sun, 17 Aug 2025 21:10:00 GMT")
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return None


def parse_record_date(value: Any, *, now: datetime | None = None) -> datetime:
    """Parse a backend timestamp into an aware local datetime. Never raises.

    Accepts datetime objects, ISO-8601 or RFC 2822 text, and Unix epoch seconds or milliseconds.
    Naive values are taken as local time. Missing or unparseable values fall
    back to now (the current local time by default).
    """
    fallback = now if now is not None else local_now()
    parsed: datetime | None = None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        # JavaScript clients send epoch milliseconds
        seconds = value / 1000 if abs(value) > _MILLIS_THRESHOLD else value
        try:
            parsed = datetime.fromtimestamp(seconds).astimezone()
        except (OverflowError, OSError, ValueError):
            parsed = None
    elif isinstance(value, str) and value.strip():
        parsed = _parse_text(value.strip())

    if parsed is None:
        return fallback
    try:
        return parsed.astimezone()
    except (OverflowError, OSError, ValueError):
        return fallback


def start_of_local_day(now: datetime | None = None) -> datetime:
    """Midnight at the start of now's day, in now's timezone."""
    current = now if now is not None else local_now()
    if current.tzinfo is None:
        current = current.astimezone()
    return current.replace(hour=0, minute=0, second=0, microsecond=0)


def local_day_bounds(now: datetime | None = None) -> tuple[datetime, datetime]:
    """Half-open [start, end) interval covering now's local day."""
    start = start_of_local_day(now)
    return start, start + timedelta(days=1)
