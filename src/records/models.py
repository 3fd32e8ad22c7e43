"""Request and record models for the journal, alarm, contact and plan stores.

Each entity has a ``*Fields`` model listing exactly the columns a client may
write. Unknown keys are rejected, so a request body can never name a column
outside that set.
"""

from __future__ import annotations

import json
import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def make_record_id() -> str:
    """Generate a new record ID."""
    return uuid.uuid4().hex


def utc_now() -> str:
    return datetime.now(UTC).isoformat()


class _Fields(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str


def _decode_list(value: object) -> object:
    """Accept JSON-encoded lists as stored in TEXT columns."""
    if isinstance(value, str):
        return json.loads(value) if value else []
    return value


# -- Journal logs --------------------------------------------------------------


class LogFields(_Fields):
    """Journal values a user records about their day."""

    mood: int | str | None = None
    energy_level: int | None = None
    sleep_hours: float | None = None
    sleep_quality: int | None = None
    night_awakenings: int | None = None
    medication_taken: bool | None = None
    journal: str | None = None
    anxiety_level: int | None = None
    irritability_level: int | None = None
    stress_level: int | None = None
    cognitive_clarity: int | None = None
    negative_thoughts: str | None = None
    intrusive_thoughts: bool | None = None
    intrusive_thoughts_description: str | None = None
    social_interaction_level: int | None = None
    physical_activity_level: int | None = None
    screen_time_minutes: int | None = None
    substance_use: str | None = None
    medication_details: str | None = None
    gratitude_entry: str | None = None
    psychotic_symptoms: bool | None = None
    image_url: str | None = None


LOG_FIELDS: tuple[str, ...] = tuple(LogFields.model_fields)


class LogCreate(LogFields):
    user_id: str = Field(min_length=1)


class LogEntry(_Record, LogFields):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    created_at: str


# -- Alarms --------------------------------------------------------------------


class AlarmFields(_Fields):
    type: str | None = None
    time: str | None = None
    label: str | None = None
    checklist: list[str] = Field(default_factory=list)
    sound_url: str | None = None
    date: str | None = None
    reminder: str | None = None
    is_enabled: bool = Field(default=True, alias="isEnabled")


ALARM_FIELDS: tuple[str, ...] = tuple(AlarmFields.model_fields)


class AlarmCreate(AlarmFields):
    user_id: str = Field(min_length=1)


class Alarm(_Record, AlarmFields):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    created_at: str

    @field_validator("checklist", mode="before")
    @classmethod
    def decode_checklist(cls, value: object) -> object:
        return _decode_list(value)


# -- Emergency contacts --------------------------------------------------------


class ContactFields(_Fields):
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)


CONTACT_FIELDS: tuple[str, ...] = tuple(ContactFields.model_fields)


class ContactCreate(ContactFields):
    user_id: str = Field(min_length=1)


class Contact(_Record, ContactFields):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# -- Safety plans --------------------------------------------------------------


class SafetyPlanFields(_Fields):
    warning_signs: list[str] = Field(default_factory=list)
    coping_strategies: list[str] = Field(default_factory=list)
    safe_places: list[str] = Field(default_factory=list)
    reasons_for_living: list[str] = Field(default_factory=list)


SAFETY_PLAN_FIELDS: tuple[str, ...] = tuple(SafetyPlanFields.model_fields)


class SafetyPlanCreate(SafetyPlanFields):
    user_id: str = Field(min_length=1)


class SafetyPlan(_Record, SafetyPlanFields):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator(*SAFETY_PLAN_FIELDS, mode="before")
    @classmethod
    def decode_lists(cls, value: object) -> object:
        return _decode_list(value)


# -- Wellness plans ------------------------------------------------------------


class WellnessPlanUpsert(_Fields):
    user_id: str = Field(min_length=1)
    items: list[str] = Field(default_factory=list)


class WellnessPlan(_Record):
    items: list[str] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def decode_items(cls, value: object) -> object:
        return _decode_list(value)
