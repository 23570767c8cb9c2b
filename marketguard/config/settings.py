"""
Configuration module for the marketguard package.

This module uses Pydantic Settings to load and validate configuration from environment variables.
All settings are validated at startup time.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PLATFORM_NAME = "String"


class EnvBaseSettings(BaseSettings):
    """
    Base class for settings sections.

    Important: nested settings are instantiated independently (via default_factory),
    so each section must know how to load from `.env` as well.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class ContentFilterSettings(EnvBaseSettings):
    """Content filter and submission screening settings."""

    max_field_length: int = Field(
        default=4096, ge=1, description="Maximum length of a screened text field (chars)"
    )
    platform_name: str = Field(
        default=DEFAULT_PLATFORM_NAME, description="Platform name used in user-facing warnings"
    )
    log_violations: bool = Field(
        default=True, description="Log flagged submissions (labels only, never raw text)"
    )

    @field_validator("platform_name")
    @classmethod
    def normalize_platform_name(cls, v: str) -> str:
        """Strip whitespace; fall back to the default name when blank."""
        v = v.strip()
        return v or DEFAULT_PLATFORM_NAME

    model_config = SettingsConfigDict(
        env_prefix="CONTENT_FILTER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class MatchingSettings(EnvBaseSettings):
    """Listing matching defaults."""

    default_preferred_type: Literal["goods", "services", "all"] = Field(
        default="all", description="Preferred business type when the viewer gives none"
    )
    default_max_distance_km: Optional[float] = Field(
        default=None, ge=0.0, description="Distance cut-off (km) when the viewer gives none"
    )

    model_config = SettingsConfigDict(
        env_prefix="MATCHING_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class LoggingSettings(EnvBaseSettings):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    json_logs: bool = Field(default=False, description="Enable JSON structured logging")

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class AppSettings(EnvBaseSettings):
    """Main application settings."""

    environment: Literal["development", "production", "testing"] = Field(
        default="development", description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class Settings(EnvBaseSettings):
    """Root settings class that aggregates all configuration sections."""

    app: AppSettings = Field(default_factory=AppSettings)
    content_filter: ContentFilterSettings = Field(default_factory=ContentFilterSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Singleton instance of settings
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get or create the singleton settings instance.

    Returns:
        Settings: Application settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """
    Force reload settings from environment.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Settings: Newly loaded settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
