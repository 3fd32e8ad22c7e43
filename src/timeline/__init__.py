"""Weekly activity grid and logging streak."""

from src.timeline.builder import build_timeline
from src.timeline.models import TimelineResult, WeeklyDay
from src.timeline.streak import current_streak
from src.timeline.weekly import build_week

__all__ = [
    "TimelineResult",
    "WeeklyDay",
    "build_timeline",
    "build_week",
    "current_streak",
]
