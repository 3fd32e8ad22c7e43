"""Data models for the weekly activity timeline."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class WeeklyDay(BaseModel):
    """One cell of the Sunday-anchored weekly grid."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    day_index: int = Field(ge=0, le=6, alias="dayIndex")
    date: dt.date
    day_name: str = Field(alias="dayName")
    has_log: bool = Field(default=False, alias="hasLog")


class TimelineResult(BaseModel):
    """Weekly grid plus the current logging streak."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    weekly_data: list[WeeklyDay] = Field(alias="weeklyData")
    current_streak: int = Field(ge=0, alias="currentStreak")

    def to_response(self) -> dict:
        """Serialize with camelCase keys and ISO dates for the JSON API."""
        return self.model_dump(mode="json", by_alias=True)
