"""Configuration management for the user management service.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded once at
process start and is immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables prefixed with
    ``USERMANAGEMENT_`` and from an optional ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="USERMANAGEMENT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "UserManagement"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/usermanagement.db"
    db_echo: bool = False

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Password Hashing Settings (argon2id)
    password_hash_time_cost: int = Field(
        default=3,
        description="Number of argon2 iterations",
    )
    password_hash_memory_cost: int = Field(
        default=65536,
        description="Argon2 memory usage in KiB",
    )
    password_hash_parallelism: int = Field(
        default=4,
        description="Argon2 parallel lanes",
    )

    # Registration Policy
    password_min_length: int = 10
    minimum_age_years: int = 13

    @field_validator(
        "password_hash_time_cost",
        "password_hash_memory_cost",
        "password_hash_parallelism",
        "password_min_length",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Reject zero or negative tuning values."""
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
