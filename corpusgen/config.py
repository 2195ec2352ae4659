"""
Configuration settings for corpusgen.

Uses Pydantic Settings to load environment variables for logging and
generation defaults. CLI options override these per invocation.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Generation defaults
    generate_count: int = Field(1_000, ge=0, alias="GENERATE_COUNT")
    generate_seed: Optional[int] = Field(None, alias="GENERATE_SEED")
    generate_max_seconds: Optional[float] = Field(None, gt=0, alias="GENERATE_MAX_SECONDS")
    generate_flush_every: int = Field(1_000, ge=1, alias="GENERATE_FLUSH_EVERY")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
