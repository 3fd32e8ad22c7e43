"""Per-user record stores: CRUD over libsql.

One class per table. Column names in generated SQL come only from the
closed field tuples in ``src.records.models``, never from request data.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from src.db import get_connection
from src.records.models import (
    ALARM_FIELDS,
    CONTACT_FIELDS,
    LOG_FIELDS,
    SAFETY_PLAN_FIELDS,
    Alarm,
    AlarmCreate,
    AlarmFields,
    Contact,
    ContactCreate,
    ContactFields,
    LogCreate,
    LogEntry,
    LogFields,
    SafetyPlan,
    SafetyPlanCreate,
    SafetyPlanFields,
    WellnessPlan,
    make_record_id,
    utc_now,
)
from src.timeline.calendar import parse_timestamp

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

logger = logging.getLogger(__name__)


class _TableStore:
    """Shared plumbing for a single table keyed by a UUID ``id``.

    Subclasses set ``table``, ``columns`` (full column order, matching
    ``create_sql``) and ``json_columns`` for list values kept as JSON text.
    Pass an explicit *db_path* for test isolation.
    """

    table: str = ""
    columns: tuple[str, ...] = ()
    json_columns: frozenset[str] = frozenset()
    create_sql: str = ""
    order_by: str = "rowid"

    def __init__(self, db_path: Path | None = None) -> None:
        self._db_path = db_path
        self._initialised = False

    async def _connect(self):  # noqa: ANN202
        db = await get_connection(local_path_override=self._db_path)
        if not self._initialised:
            try:
                await db.execute(self.create_sql)
                await db.commit()
            except Exception:
                await db.close()
                raise
            self._initialised = True
        return db

    def _encode(self, values: dict[str, Any]) -> dict[str, Any]:
        encoded = {}
        for key, value in values.items():
            if key in self.json_columns:
                value = json.dumps(value if value is not None else [])
            elif isinstance(value, bool):
                value = int(value)
            encoded[key] = value
        return encoded

    async def _get(self, db, record_id: str) -> dict[str, Any] | None:  # noqa: ANN001
        cursor = await db.execute(
            f"SELECT {', '.join(self.columns)} FROM {self.table} WHERE id = ?",
            (record_id,),
        )
        return await cursor.fetchone_dict(self.columns)

    async def _insert(self, values: dict[str, Any]) -> dict[str, Any]:
        row = self._encode({"id": make_record_id(), **values})
        names = list(row)
        placeholders = ", ".join("?" for _ in names)
        db = await self._connect()
        try:
            await db.execute(
                f"INSERT INTO {self.table} ({', '.join(names)}) VALUES ({placeholders})",
                tuple(row[name] for name in names),
            )
            await db.commit()
            created = await self._get(db, row["id"])
        finally:
            await db.close()
        logger.info("Inserted %s row %s", self.table, row["id"])
        return created or row

    async def _update(self, record_id: str, values: dict[str, Any]) -> dict[str, Any] | None:
        if not values:
            raise ValueError("No fields to update")
        row = self._encode(values)
        assignments = ", ".join(f"{name} = ?" for name in row)
        db = await self._connect()
        try:
            cursor = await db.execute(
                f"UPDATE {self.table} SET {assignments} WHERE id = ?",
                (*row.values(), record_id),
            )
            await db.commit()
            if cursor.rowcount == 0:
                return None
            return await self._get(db, record_id)
        finally:
            await db.close()

    async def _list_for_user(self, user_id: str) -> list[dict[str, Any]]:
        db = await self._connect()
        try:
            cursor = await db.execute(
                f"SELECT {', '.join(self.columns)} FROM {self.table} "
                f"WHERE user_id = ? ORDER BY {self.order_by}",
                (user_id,),
            )
            return await cursor.fetchall_dicts(self.columns)
        finally:
            await db.close()

    async def delete(self, record_id: str) -> bool:
        """Delete a record. Returns True if a row was removed."""
        db = await self._connect()
        try:
            cursor = await db.execute(
                f"DELETE FROM {self.table} WHERE id = ?", (record_id,)
            )
            await db.commit()
            deleted = cursor.rowcount > 0
        finally:
            await db.close()
        if deleted:
            logger.info("Deleted %s row %s", self.table, record_id)
        return deleted


# -- Journal logs --------------------------------------------------------------


class LogStore(_TableStore):
    """Daily journal entries. Feeds the timeline and streak."""

    table = "logs"
    columns = ("id", "user_id", "created_at", *LOG_FIELDS)
    order_by = "created_at"
    create_sql = """
    CREATE TABLE IF NOT EXISTS logs (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        created_at TEXT NOT NULL,
        mood,  -- no type affinity, so ints and text keep their type
        energy_level INTEGER,
        sleep_hours REAL,
        sleep_quality INTEGER,
        night_awakenings INTEGER,
        medication_taken INTEGER,
        journal TEXT,
        anxiety_level INTEGER,
        irritability_level INTEGER,
        stress_level INTEGER,
        cognitive_clarity INTEGER,
        negative_thoughts TEXT,
        intrusive_thoughts INTEGER,
        intrusive_thoughts_description TEXT,
        social_interaction_level INTEGER,
        physical_activity_level INTEGER,
        screen_time_minutes INTEGER,
        substance_use TEXT,
        medication_details TEXT,
        gratitude_entry TEXT,
        psychotic_symptoms INTEGER,
        image_url TEXT
    )
    """

    async def add(self, entry: LogCreate, created_at: str | None = None) -> LogEntry:
        """Insert a log. *created_at* defaults to now (UTC)."""
        row = await self._insert(
            {**entry.model_dump(), "created_at": created_at or utc_now()}
        )
        return LogEntry.model_validate(row)

    async def update(self, log_id: str, fields: LogFields) -> LogEntry | None:
        """Apply only the fields the client actually sent.

        Returns None when no log has *log_id*.
        """
        row = await self._update(log_id, fields.model_dump(exclude_unset=True))
        return LogEntry.model_validate(row) if row else None

    async def list_for_user(self, user_id: str) -> list[LogEntry]:
        rows = await self._list_for_user(user_id)
        return [LogEntry.model_validate(row) for row in rows]

    async def list_created_at(self, user_id: str) -> list[datetime]:
        """Creation times of every log for *user_id* (aware, any order)."""
        db = await self._connect()
        try:
            cursor = await db.execute(
                "SELECT created_at FROM logs WHERE user_id = ?", (user_id,)
            )
            rows = await cursor.fetchall()
        finally:
            await db.close()
        return [parse_timestamp(row[0]) for row in rows]


# -- Alarms --------------------------------------------------------------------


class AlarmStore(_TableStore):
    table = "alarms"
    columns = ("id", "user_id", "created_at", *ALARM_FIELDS)
    json_columns = frozenset({"checklist"})
    order_by = "created_at"
    create_sql = """
    CREATE TABLE IF NOT EXISTS alarms (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        created_at TEXT NOT NULL,
        type TEXT,
        time TEXT,
        label TEXT,
        checklist TEXT NOT NULL DEFAULT '[]',
        sound_url TEXT,
        date TEXT,
        reminder TEXT,
        is_enabled INTEGER NOT NULL DEFAULT 1
    )
    """

    async def add(self, alarm: AlarmCreate) -> Alarm:
        row = await self._insert({**alarm.model_dump(), "created_at": utc_now()})
        return Alarm.model_validate(row)

    async def update(self, alarm_id: str, fields: AlarmFields) -> Alarm | None:
        """Replace every editable field of an alarm."""
        row = await self._update(alarm_id, fields.model_dump())
        return Alarm.model_validate(row) if row else None

    async def list_for_user(self, user_id: str) -> list[Alarm]:
        return [Alarm.model_validate(row) for row in await self._list_for_user(user_id)]


# -- Emergency contacts --------------------------------------------------------


class ContactStore(_TableStore):
    table = "emergency_contacts"
    columns = ("id", "user_id", *CONTACT_FIELDS)
    create_sql = """
    CREATE TABLE IF NOT EXISTS emergency_contacts (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        phone TEXT NOT NULL
    )
    """

    async def add(self, contact: ContactCreate) -> Contact:
        return Contact.model_validate(await self._insert(contact.model_dump()))

    async def update(self, contact_id: str, fields: ContactFields) -> Contact | None:
        row = await self._update(contact_id, fields.model_dump())
        return Contact.model_validate(row) if row else None

    async def list_for_user(self, user_id: str) -> list[Contact]:
        return [Contact.model_validate(row) for row in await self._list_for_user(user_id)]


# -- Safety plans --------------------------------------------------------------


class SafetyPlanStore(_TableStore):
    table = "safety_plans"
    columns = ("id", "user_id", *SAFETY_PLAN_FIELDS)
    json_columns = frozenset(SAFETY_PLAN_FIELDS)
    create_sql = """
    CREATE TABLE IF NOT EXISTS safety_plans (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        warning_signs TEXT NOT NULL DEFAULT '[]',
        coping_strategies TEXT NOT NULL DEFAULT '[]',
        safe_places TEXT NOT NULL DEFAULT '[]',
        reasons_for_living TEXT NOT NULL DEFAULT '[]'
    )
    """

    async def add(self, plan: SafetyPlanCreate) -> SafetyPlan:
        return SafetyPlan.model_validate(await self._insert(plan.model_dump()))

    async def update(self, plan_id: str, fields: SafetyPlanFields) -> SafetyPlan | None:
        row = await self._update(plan_id, fields.model_dump())
        return SafetyPlan.model_validate(row) if row else None

    async def list_for_user(self, user_id: str) -> list[SafetyPlan]:
        rows = await self._list_for_user(user_id)
        return [SafetyPlan.model_validate(row) for row in rows]


# -- Wellness plans ------------------------------------------------------------


class WellnessPlanStore(_TableStore):
    """At most one plan per user, holding an ordered list of item labels."""

    table = "wellness_plans"
    columns = ("id", "user_id", "items")
    json_columns = frozenset({"items"})
    create_sql = """
    CREATE TABLE IF NOT EXISTS wellness_plans (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL UNIQUE,
        items TEXT NOT NULL DEFAULT '[]'
    )
    """

    async def _get_for_user(self, user_id: str) -> WellnessPlan | None:
        rows = await self._list_for_user(user_id)
        return WellnessPlan.model_validate(rows[0]) if rows else None

    async def list_for_user(self, user_id: str) -> list[WellnessPlan]:
        plan = await self._get_for_user(user_id)
        return [plan] if plan else []

    async def upsert(self, user_id: str, items: list[str]) -> WellnessPlan:
        """Replace the user's items, creating the plan if needed.

        A single ``INSERT ... ON CONFLICT`` statement, so concurrent first
        writes for one user end up as one plan.
        """
        db = await self._connect()
        try:
            await db.execute(
                "INSERT INTO wellness_plans (id, user_id, items) VALUES (?, ?, ?) "
                "ON CONFLICT(user_id) DO UPDATE SET items = excluded.items",
                (make_record_id(), user_id, json.dumps(items)),
            )
            await db.commit()
            cursor = await db.execute(
                f"SELECT {', '.join(self.columns)} FROM wellness_plans WHERE user_id = ?",
                (user_id,),
            )
            row = await cursor.fetchone_dict(self.columns)
        finally:
            await db.close()
        logger.info("Upserted wellness plan for %s", user_id)
        return WellnessPlan.model_validate(row)

    async def remove_item(self, user_id: str, label: str) -> WellnessPlan | None:
        """Drop every occurrence of *label*. Returns None if the user has no plan."""
        existing = await self._get_for_user(user_id)
        if existing is None:
            return None
        items = [item for item in existing.items if item != label]
        row = await self._update(existing.id, {"items": items})
        return WellnessPlan.model_validate(row) if row else None
