"""Shared test fixtures."""

from pathlib import Path

import pytest

from src.api.context import Stores
from src.knowledge.base import KnowledgeBase
from src.records.store import (
    AlarmStore,
    ContactStore,
    LogStore,
    SafetyPlanStore,
    WellnessPlanStore,
)


@pytest.fixture(autouse=False)
def _no_turso(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure tests use local file, not remote Turso."""
    monkeypatch.setattr("src.config.settings.turso_database_url", "")


@pytest.fixture
def kb() -> KnowledgeBase:
    """Two-item knowledge base: an intro with no tags and one tagged item."""
    return KnowledgeBase.from_records([
        {"name": "Chatbot Information", "tags": "", "content": "INTRO"},
        {"name": "Anxiety Tips", "tags": "anxious worried", "content": "TIPS"},
    ])


@pytest.fixture
def stores(tmp_path: Path, _no_turso: None) -> Stores:
    """All record stores backed by one temp database."""
    db_path = tmp_path / "test.db"
    return Stores(
        logs=LogStore(db_path=db_path),
        alarms=AlarmStore(db_path=db_path),
        contacts=ContactStore(db_path=db_path),
        safety_plans=SafetyPlanStore(db_path=db_path),
        wellness_plans=WellnessPlanStore(db_path=db_path),
    )
