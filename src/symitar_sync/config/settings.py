"""Application configuration settings."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LicenseSettings(BaseSettings):
    """License server configuration."""

    sst_stage_prefix: str = Field(default="", description="Stage prefix for non-production license hosts")
    is_sandbox: bool = Field(default=False, description="Use the sandbox license server")
    request_timeout_seconds: float = Field(default=30.0, gt=0, description="Per-attempt request timeout")
    max_attempts: int = Field(default=3, ge=1, description="Validation attempts before giving up")

    model_config = SettingsConfigDict(env_prefix="", extra="ignore")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO")
    format: str = Field(default="console")
    file_path: Optional[str] = Field(default=None)

    model_config = SettingsConfigDict(env_prefix="LOG_", extra="ignore")


class AppSettings(BaseSettings):
    """Main application settings."""

    name: str = Field(default="Symitar Sync")
    version: str = Field(default="1.0.0")

    license: LicenseSettings = Field(default_factory=LicenseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="SYMITAR_SYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get application settings."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next access re-reads the environment."""
    global _settings
    _settings = None
