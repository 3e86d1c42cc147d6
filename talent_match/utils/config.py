"""
Configuration management for the matching engine.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Base paths
ROOT_DIR = Path(__file__).parent.parent.parent


class DatabaseSettings(BaseSettings):
    """MongoDB database configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 27017
    name: str = "talent_match"
    username: str | None = None
    password: str | None = None

    # Server selection / socket timeout for the pymongo client
    timeout_ms: int = 5000


class MatchingSettings(BaseSettings):
    """Matching engine policy configuration."""

    model_config = SettingsConfigDict(env_prefix="MATCH_")

    # None returns the full ranked list
    default_limit: Optional[int] = Field(default=None, ge=1)

    # Bound on every collaborator read
    query_timeout_seconds: float = Field(default=5.0, gt=0)

    # Most recent views considered by the behavioral adjuster
    view_history_limit: int = Field(default=50, ge=0)

    # Used when neither the profile nor the request states a desired guarantee
    default_desired_guarantee: int = Field(default=20000, gt=0)

    # Behavioral weight adjustment
    personalize: bool = True
    learning_factor: float = Field(default=1.0, ge=0)

    # Thread fan-out for large listing pools
    parallel_threshold: int = Field(default=200, ge=1)
    max_workers: int = Field(default=8, ge=1)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Path = ROOT_DIR / "logs" / "talent_match.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "talent-match"
    version: str = "0.1.0"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Global settings instance (singleton pattern)
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings
