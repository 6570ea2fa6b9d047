"""
Configuration management using pydantic-settings.
Loads configuration from environment variables and .env file.
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Next-value plugin
    NEXT_TAG_KEY: str = "next"  # Key looked up in Column.info, matched case-insensitively
    NEXT_RAISE_ON_ERROR: bool = True  # Abort the flush when generation errors were collected

    # Application Configuration
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FILE: str | None = None

    @property
    def tag_key(self) -> str:
        """Tag key in the canonical (upper-case) form used for lookups."""
        return self.NEXT_TAG_KEY.upper()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Global settings instance
settings = get_settings()
