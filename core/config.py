"""Application settings read from environment variables and an optional `.env` file.

Settings are resolved once per process through `get_settings`; tests that
need different values call `get_settings.cache_clear()` after patching the
environment.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the API and its AI collaborators."""

    write_database_url: str = "sqlite:///nutrition.db"
    # Falls back to the write URL when unset.
    read_database_url: Optional[str] = None
    openai_api_key: Optional[str] = None
    openai_chat_model: str = "gpt-4o"
    openai_menu_model: str = "gpt-4o-mini"
    openai_timeout_seconds: float = Field(default=60.0, gt=0)
    menu_provider_max_attempts: int = Field(default=3, ge=1)
    chat_history_window: int = Field(default=10, ge=0)
    log_dir: str = "logs"
    log_level: str = "INFO"
    # Comma separated list of allowed origins.
    cors_origins: str = "*"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("openai_api_key")
    @classmethod
    def _blank_key_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def _default_read_url(self) -> "Settings":
        if not self.read_database_url:
            self.read_database_url = self.write_database_url
        return self

    @property
    def ai_enabled(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
