"""
Application configuration using pydantic-settings.

Loads environment variables from .env file and provides typed access
to configuration values throughout the application.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # API Keys (checked when the Gemini client is built, not at load time)
    gemini_api_key: Optional[str] = None

    # Gemini configuration
    gemini_model: str = "gemini-2.5-flash"

    # Retry policy for the completion call
    retry_max_attempts: int = 3
    retry_base_delay: float = 1.0
    retry_backoff_multiplier: float = 2.0

    # Longest raw-text excerpt carried in error messages
    error_excerpt_length: int = 200

    # Application settings
    debug: bool = False
    app_name: str = "Property Recommendation API"
    app_version: str = "0.1.0"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures we only load settings once and reuse
    the same instance throughout the application lifecycle.
    """
    return Settings()
