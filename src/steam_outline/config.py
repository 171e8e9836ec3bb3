"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables with validation,
type coercion, and sensible defaults.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SteamConfig(BaseSettings):
    """Steam community profile configuration."""

    model_config = SettingsConfigDict(env_prefix="STEAM_")

    username: str | None = Field(
        default=None,
        description="Steam community profile name (the <name> in /id/<name>)",
    )
    profile_base_url: str = Field(
        default="http://steamcommunity.com",
        description="Base URL of the Steam community site",
    )
    timeout_seconds: int = Field(
        default=30,
        ge=5,
        le=120,
        description="HTTP request timeout in seconds",
    )

    @field_validator("profile_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended directly."""
        return v.rstrip("/")

    @field_validator("username")
    @classmethod
    def blank_username_is_unset(cls, v: str | None) -> str | None:
        """Treat an empty or whitespace username as not configured."""
        if v is None or not v.strip():
            return None
        return v.strip()


class AssetConfig(BaseSettings):
    """Logo image cache configuration."""

    model_config = SettingsConfigDict(env_prefix="ASSETS_")

    image_dir: Path = Field(
        default=Path("steamimages"),
        description="Directory where game logos are cached",
    )
    max_concurrent_downloads: int = Field(
        default=4,
        ge=1,
        le=32,
        description="Maximum number of logo downloads running at once",
    )
    timeout_seconds: int = Field(
        default=30,
        ge=5,
        le=120,
        description="HTTP timeout for a single logo download",
    )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )
    include_timestamp: bool = Field(
        default=True,
        description="Include timestamp in log entries",
    )


class Settings(BaseSettings):
    """
    Main application settings.

    Aggregates all configuration sections and provides
    a single entry point for configuration access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "production"] = Field(
        default="development",
        description="Deployment environment",
    )

    # Sub-configurations
    steam: SteamConfig = Field(default_factory=SteamConfig)
    assets: AssetConfig = Field(default_factory=AssetConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once
    and reused across the application.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
