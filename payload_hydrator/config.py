"""
Configuration settings for the payload hydrator.

Uses Pydantic Settings to load environment variables for logging and the CLI's
default hydration policy. The library functions themselves take no settings;
only the CLI and logging setup read them.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Hydration policy (CLI)
    strict: bool = Field(False, alias="HYDRATOR_STRICT")
    show_record: bool = Field(True, alias="HYDRATOR_SHOW_RECORD")

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
