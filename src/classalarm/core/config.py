"""Configuration management for ClassAlarm.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded once and is
immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CLASSALARM_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "ClassAlarm"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"

    # Group Rules
    cooldown_seconds: int = Field(
        default=60,
        description="Seconds a group must wait after an accepted alarm before the next one",
    )
    max_members: int = Field(default=20, description="Maximum number of members per group")
    group_code_length: int = 6

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./ca_data/classalarm.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Security Settings
    secret_key: str = Field(
        default="change-me-in-production-use-openssl-rand-hex-32",
        description="Secret key for session token signing",
    )
    access_token_expire_minutes: int = 60 * 24 * 30
    device_secret_salt: str = Field(
        default="change-me-in-production",
        description="Key mixed into the secret derived from a device identifier",
    )

    # Push Delivery Settings
    push_provider: Literal["log", "http"] = "log"
    push_gateway_url: str | None = None
    push_api_key: str | None = None
    push_timeout_seconds: float = 10.0
    alarm_sound: str = "alarm.caf"
    alarm_badge: str = "Increment"

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @field_validator("cooldown_seconds", "max_members", "group_code_length")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Group limits must be positive."""
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


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function caches the settings instance to avoid reloading
    configuration on every call. Settings are loaded once at startup.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
