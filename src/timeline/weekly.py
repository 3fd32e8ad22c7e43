"""Sunday-anchored 7-day activity grid."""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

from src.timeline.calendar import sunday_index
from src.timeline.models import WeeklyDay

if TYPE_CHECKING:
    from collections.abc import Collection

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def week_start(today: date) -> date:
    """The Sunday on or before *today*."""
    return today - timedelta(days=sunday_index(today))


def build_week(dates_with_logs: Collection[date], today: date) -> list[WeeklyDay]:
    """Build the grid for the week containing *today*.

    Always returns seven days, Sunday first, with ``has_log`` set for each
    day present in *dates_with_logs*.
    """
    start = week_start(today)
    days = []
    for offset in range(7):
        day = start + timedelta(days=offset)
        days.append(
            WeeklyDay(
                day_index=offset,
                date=day,
                day_name=DAY_NAMES[offset],
                has_log=day in dates_with_logs,
            )
        )
    return days
