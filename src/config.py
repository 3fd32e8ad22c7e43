"""Application settings loaded from environment variables."""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_file() -> str | None:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return None
    return ".env"


class Settings(BaseSettings):
    """Service configuration. All values come from environment variables."""

    # OpenAI
    openai_api_key: str = Field(default="")
    chat_model: str = Field(default="gpt-4")
    generation_max_tokens: int = Field(default=300)
    generation_timeout_seconds: float = Field(default=30.0)

    # Prompt composition
    max_prompt_length: int = Field(default=300)
    knowledge_base_path: Path = Field(default=Path("config/knowledge_base.yaml"))

    # Database
    database_path: Path = Field(default=Path("data/wellness.db"))

    # Turso (hosted libSQL). When set, it overrides local database_path
    turso_database_url: str = Field(default="")
    turso_auth_token: str = Field(default="")

    # Calendar days for timelines and streaks are computed in this zone
    app_timezone: str = Field(default="America/Chicago")

    # HTTP server
    server_host: str = Field(default="0.0.0.0")
    server_port: int = Field(default=3000)

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=_env_file(), env_file_encoding="utf-8")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        if os.getenv("PYTEST_CURRENT_TEST"):
            return (init_settings,)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)


settings = Settings()
