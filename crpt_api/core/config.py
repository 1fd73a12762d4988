"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

DEFAULT_BASE_URL = "https://ismp.crpt.ru/api/v3"

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file and not os.getenv("TESTING"):
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_crpt_settings() -> "CrptSettings":
    """Build registration service settings from environment."""

    return CrptSettings()


def _build_log_settings() -> "LogSettings":
    return LogSettings()


class CrptSettings(BaseSettings):
    """Registration service client configuration.

    ``window_seconds`` and ``request_limit`` bound the number of submissions:
    at most ``request_limit`` documents in any trailing ``window_seconds``.
    """

    base_url: str = Field(
        DEFAULT_BASE_URL,
        description="Endpoint that receives document submissions (HTTP POST)",
    )
    window_seconds: float = Field(
        60.0,
        description="Length of the rolling rate limit window in seconds",
        gt=0,
    )
    request_limit: int = Field(
        10,
        description="Maximum number of submissions allowed per window",
        ge=1,
    )
    timeout_seconds: float = Field(
        30.0,
        description="HTTP request timeout in seconds",
        gt=0,
    )
    acquire_timeout_seconds: float | None = Field(
        None,
        description=(
            "How long a gateway request may wait for a free slot before it is "
            "cancelled (unset waits indefinitely)"
        ),
    )

    model_config = SettingsConfigDict(
        env_prefix="CRPT_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log destination: stdout or file")
    file_path: str | None = Field(
        None,
        description="Log file path when output is 'file'",
    )
    max_bytes: int = Field(
        0,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(
        5,
        description="Number of rotated log files to keep",
        ge=0,
    )
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to propagate the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if a setting is malformed.
    """

    app_env: str = APP_ENV
    crpt: CrptSettings = Field(default_factory=_build_crpt_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()
