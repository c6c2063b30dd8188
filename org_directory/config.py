"""Runtime configuration loaded from the environment (and ``.env``) via Pydantic settings."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Airtable connection and process settings.

    The base, table and token are required and have no defaults.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True)

    base_id: str = Field(validation_alias="AIRTABLE_BASE_ID")
    table_name: str = Field(validation_alias="AIRTABLE_TABLE_NAME")
    token: SecretStr = Field(validation_alias="AIRTABLE_PAT")
    api_url: str = Field(
        default="https://api.airtable.com/v0",
        validation_alias="AIRTABLE_API_URL",
    )
    timeout: float = Field(default=30.0, gt=0, validation_alias="AIRTABLE_TIMEOUT")
    log_level: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "ORG_DIRECTORY__LOG_LEVEL"))

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings."""

    return Settings()


def reload_settings() -> Settings:
    """Clear the cached settings and reload from the environment."""

    get_settings.cache_clear()
    return get_settings()
