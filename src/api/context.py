"""Application-scoped dependencies and request helpers for the HTTP API.

Everything a handler needs is built once at startup and stored on the
aiohttp ``Application`` under the keys below.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TypeVar

from aiohttp import web
from pydantic import BaseModel, ValidationError

from src.knowledge.base import KnowledgeBase
from src.llm.client import GenerationClient
from src.records.store import (
    AlarmStore,
    ContactStore,
    LogStore,
    SafetyPlanStore,
    WellnessPlanStore,
)

try:
    import zoneinfo
except ImportError:  # pragma: no cover
    from backports import zoneinfo  # type: ignore[no-redef]

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class Stores:
    """The record stores shared by all handlers."""

    logs: LogStore = field(default_factory=LogStore)
    alarms: AlarmStore = field(default_factory=AlarmStore)
    contacts: ContactStore = field(default_factory=ContactStore)
    safety_plans: SafetyPlanStore = field(default_factory=SafetyPlanStore)
    wellness_plans: WellnessPlanStore = field(default_factory=WellnessPlanStore)


KNOWLEDGE_BASE = web.AppKey("knowledge_base", KnowledgeBase)
GENERATION_CLIENT = web.AppKey("generation_client", GenerationClient)
STORES = web.AppKey("stores", Stores)
MAX_PROMPT_LENGTH = web.AppKey("max_prompt_length", int)
TIMEZONE = web.AppKey("timezone", zoneinfo.ZoneInfo)
CLOCK = web.AppKey("clock", Callable[[], datetime])


def json_error(message: str, status: int) -> web.Response:
    return web.json_response({"error": message}, status=status)


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors(include_url=False):
        loc = ".".join(str(part) for part in error["loc"])
        parts.append(f"{loc}: {error['msg']}" if loc else error["msg"])
    return "; ".join(parts)


class BadRequest(Exception):
    """Request body could not be parsed into the expected model."""


async def parse_body(request: web.Request, model: type[ModelT]) -> ModelT:
    """Read the JSON body and validate it against *model*.

    Raises:
        BadRequest: With a readable message for invalid JSON or fields.
    """
    try:
        payload: Any = await request.json()
    except ValueError as exc:
        raise BadRequest("Invalid JSON body") from exc

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise BadRequest(_describe(exc)) from exc


def dump(record: BaseModel) -> dict[str, Any]:
    """Serialize a record for a JSON response."""
    return record.model_dump(mode="json", by_alias=True)
