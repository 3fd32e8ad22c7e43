"""Time-zone policy for turning log timestamps into calendar days.

Every calendar date the timeline uses (grid cells, log days, today and
yesterday) is taken in a single configured IANA zone, ``APP_TIMEZONE``.
Naive timestamps are assumed to be UTC, which is how the stores write them.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from typing import TYPE_CHECKING

try:
    import zoneinfo
except ImportError:  # pragma: no cover
    from backports import zoneinfo  # type: ignore[no-redef]

from src.config import settings

if TYPE_CHECKING:
    from collections.abc import Iterable

ONE_DAY = timedelta(days=1)


def get_zone(name: str | None = None) -> zoneinfo.ZoneInfo:
    """Return the configured zone, or *name* when given."""
    return zoneinfo.ZoneInfo(name or settings.app_timezone)


def parse_timestamp(value: datetime | str) -> datetime:
    """Parse an ISO 8601 string (or pass through a datetime) as an aware datetime."""
    ts = datetime.fromisoformat(value) if isinstance(value, str) else value
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


def local_date(value: datetime | str, tz: zoneinfo.ZoneInfo) -> date:
    """Calendar date of *value* as seen in *tz*."""
    return parse_timestamp(value).astimezone(tz).date()


def log_dates(timestamps: Iterable[datetime | str], tz: zoneinfo.ZoneInfo) -> frozenset[date]:
    """Distinct local calendar dates on which anything was logged."""
    return frozenset(local_date(ts, tz) for ts in timestamps)


def sunday_index(day: date) -> int:
    """Weekday index counted from Sunday (Sunday = 0 .. Saturday = 6)."""
    return (day.weekday() + 1) % 7
