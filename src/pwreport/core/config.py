"""Configuration settings for pwreport."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from PWREPORT_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PWREPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"
    log_json_format: bool = False

    # Output
    screenshot_dir: Path = Path("./screenshots")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
