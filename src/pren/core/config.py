"""Configuration management using Pydantic settings."""

from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


def _default_storage_path() -> str:
    return str(Path.home() / "pren" / "prompts")


class EngineSettings(BaseSettings):
    """Template resolution configuration."""

    max_depth: int = Field(10, alias="PREN_MAX_DEPTH")

    model_config = {"env_prefix": "", "extra": "ignore"}


class StorageSettings(BaseSettings):
    """Prompt storage configuration."""

    base_path: str = Field(default_factory=_default_storage_path, alias="PREN_STORAGE_PATH")

    model_config = {"env_prefix": "", "extra": "ignore"}


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("WARNING", alias="PREN_LOG_LEVEL")
    format: str = Field("rich", alias="PREN_LOG_FORMAT")

    model_config = {"env_prefix": "", "extra": "ignore"}


class Settings(BaseSettings):
    """Root configuration aggregating all settings."""

    engine: EngineSettings = Field(default_factory=EngineSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {
        "env_file": ".env",
        "env_nested_delimiter": "__",
        "extra": "ignore"
    }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """Reload settings (clears cache)."""
    get_settings.cache_clear()
    return get_settings()
