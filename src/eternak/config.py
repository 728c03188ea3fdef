"""
E-TernakID - Configuration and settings.

All settings come from the environment or a local .env file.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Only OPENAI_API_KEY is required. Supabase credentials are needed when
    STORE_BACKEND=supabase (the default).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OpenAI
    openai_api_key: str
    openai_model: str = "gpt-4.1-mini"
    llm_temperature: float = 0.4
    llm_max_retries: int = 2

    # Application
    eternak_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ETERNAK_LOG_PROMPTS=1 - log to local files (dev only)
    eternak_log_prompts: bool = False

    # Document store
    store_backend: Literal["supabase", "memory"] = "supabase"
    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    supabase_service_role_key: str | None = None
    livestock_table: str = "livestock"

    # Seeding and sync
    seed_on_startup: bool = True
    seed_animal_count: int = 100
    sync_poll_seconds: float = 0.0  # 0 disables polling

    # Shared password guarding edits and deletes
    edit_password: str = "kit321"

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:9002",
    ]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
