"""
Central application configuration using pydantic-settings.

Covers the scoring/configuration service endpoint and logging. Rule
constants live in `hotseat.config.GameConfig`.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    """
    Configuration for the remote scoring/configuration service.

    Environment variables (prefix: HOTSEAT_):
        HOTSEAT_BASE_URL        - Base URL of the service (default: http://127.0.0.1:5000)
        HOTSEAT_TIMEOUT_SECONDS - Request timeout in seconds (default: 5)
        HOTSEAT_LOG_LEVEL       - Logging level name (default: INFO)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="HOTSEAT_",
    )

    base_url: str = Field(
        default="http://127.0.0.1:5000",
        description="Base URL of the scoring/configuration service.",
    )
    timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="HTTP request timeout in seconds.",
    )
    log_level: str = Field(default="INFO")

    @field_validator("base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/") if isinstance(value, str) else value

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache
def get_service_settings() -> ServiceSettings:
    """Return cached service settings instance."""
    return ServiceSettings()


def configure_logging(settings: ServiceSettings | None = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_service_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
