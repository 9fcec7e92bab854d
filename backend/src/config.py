"""
Application configuration.

Loads and validates settings from environment variables.
"""

from functools import lru_cache
from typing import Optional, Set

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    """Application settings with validation."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = Field("Tag Admin", description="Application title")

    # Security settings
    WSSE_SECRET: str = Field(..., description="Shared secret mixed into request digests")
    SESSION_SECRET: str = Field(..., description="Secret used to sign the session cookie")
    CORS_ORIGINS: Set[str] = Field(
        default={'http://localhost:8000'},
        description="Allowed CORS origins"
    )

    # Storage settings
    DATABASE_URL: Optional[str] = Field(
        None,
        description="SQLAlchemy database URL; unset selects the in-memory store"
    )

    # Localization settings
    UI_LANGUAGE: str = Field("en", description="Message catalogue language")
    LOCALE_DIR: Optional[str] = Field(None, description="gettext catalogue directory")

    # Logging settings
    LOG_LEVEL: str = Field("INFO", description="Root log level")

    @field_validator('WSSE_SECRET', 'SESSION_SECRET')
    @classmethod
    def validate_secret(cls, v):
        """Validate that secrets are not empty."""
        if not v or not v.strip():
            raise ValueError("Secret cannot be empty")
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
