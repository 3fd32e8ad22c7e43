"""Consecutive-day logging streak."""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.timeline.calendar import ONE_DAY

if TYPE_CHECKING:
    from collections.abc import Collection
    from datetime import date


def current_streak(dates_with_logs: Collection[date], today: date) -> int:
    """Count consecutive logged days ending today, or yesterday as a grace day.

    A user who logged yesterday but not yet today keeps the full count of
    the run that ended yesterday. Any earlier gap resets the streak to 0.
    """
    yesterday = today - ONE_DAY
    if today in dates_with_logs:
        day = today
    elif yesterday in dates_with_logs:
        day = yesterday
    else:
        return 0

    streak = 0
    while day in dates_with_logs:
        streak += 1
        day -= ONE_DAY
    return streak
