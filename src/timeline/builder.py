"""Combine the weekly grid and streak for one user's logs."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from src.timeline.calendar import get_zone, log_dates
from src.timeline.models import TimelineResult
from src.timeline.streak import current_streak
from src.timeline.weekly import build_week

if TYPE_CHECKING:
    from collections.abc import Iterable

    try:
        import zoneinfo
    except ImportError:  # pragma: no cover
        from backports import zoneinfo  # type: ignore[no-redef]


def build_timeline(
    timestamps: Iterable[datetime | str],
    now: datetime | None = None,
    tz: zoneinfo.ZoneInfo | None = None,
) -> TimelineResult:
    """Derive the current week's grid and streak from log creation times.

    Input order does not matter. *now* defaults to the current time and is
    converted to *tz* (the configured zone by default) before taking its date.
    """
    tz = tz or get_zone()
    now = now or datetime.now(tz)
    if now.tzinfo is None:
        now = now.replace(tzinfo=tz)
    today = now.astimezone(tz).date()

    dates = log_dates(timestamps, tz)
    return TimelineResult(
        weekly_data=build_week(dates, today),
        current_streak=current_streak(dates, today),
    )
