"""Mini README: Centralised configuration models and helpers for shift close.

Structure:
    * ShiftCloseSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read the webhook endpoint, the delay before a
    successful submission banner returns to idle, and the service bind
    address. Values come from ``SHIFTCLOSE_*`` environment variables or a
    ``.env`` file and are validated once per process.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ShiftCloseSettings(BaseSettings):
    """Runtime configuration for the shift close service."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    webhook_url: Optional[str] = Field(
        None,
        description=(
            "Endpoint receiving the JSON array of ledger entries on submission."
            " Submissions fail with a connectivity error while this is unset."
        ),
    )
    webhook_timeout_seconds: float = Field(
        10.0,
        description="Seconds to wait for the webhook before treating it as unreachable.",
        gt=0,
    )
    status_reset_seconds: float = Field(
        5.0,
        description="Delay before a successful submission status returns to idle.",
        ge=0,
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the interactive service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the interactive service exposes.",
        ge=1,
        le=65535,
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level applied by the launcher.",
    )

    model_config = SettingsConfigDict(
        env_prefix="SHIFTCLOSE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("webhook_url", mode="before")
    @classmethod
    def blank_url_is_unset(cls, value: Optional[str]) -> Optional[str]:
        """Treat empty or whitespace-only URLs as not configured."""

        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        """Accept only level names the logging module understands."""

        normalised = value.strip().upper()
        if not isinstance(logging.getLevelName(normalised), int):
            raise ValueError(f"Unsupported log level: {value}")
        return normalised


@lru_cache()
def get_settings() -> ShiftCloseSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return ShiftCloseSettings()
