"""Tests for Settings configuration model."""

from pathlib import Path

import pytest

from src.config import Settings


class TestDefaults:
    def test_default_chat_model(self):
        s = Settings()
        assert s.chat_model == "gpt-4"

    def test_default_generation_limits(self):
        s = Settings()
        assert s.generation_max_tokens == 300
        assert s.generation_timeout_seconds == 30.0

    def test_default_max_prompt_length(self):
        s = Settings()
        assert s.max_prompt_length == 300

    def test_default_database_path(self):
        s = Settings()
        assert s.database_path == Path("data/wellness.db")

    def test_default_knowledge_base_path(self):
        s = Settings()
        assert s.knowledge_base_path == Path("config/knowledge_base.yaml")

    def test_default_server_port(self):
        s = Settings()
        assert s.server_port == 3000

    def test_default_timezone(self):
        s = Settings()
        assert s.app_timezone == "America/Chicago"


class TestOverrides:
    def test_explicit_values_win(self):
        s = Settings(chat_model="gpt-4o-mini", max_prompt_length=500)
        assert s.chat_model == "gpt-4o-mini"
        assert s.max_prompt_length == 500

    def test_environment_ignored_under_pytest(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CHAT_MODEL", "from-env")
        s = Settings()
        assert s.chat_model == "gpt-4"


class TestExtraForbidden:
    def test_unknown_env_var_raises(self):
        with pytest.raises(ValueError, match="extra_forbidden"):
            Settings(**{"nonexistent_field": "value"})
