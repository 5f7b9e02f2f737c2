"""Pydantic-based settings management for cpuguard."""

from __future__ import annotations

import re
from typing import Any

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Plain signed decimals only: no surrounding spaces, no "_" separators.
_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE | re.ASCII,
)


class Settings(BaseSettings):
    """Watchdog settings loaded from environment variables / .env file.

    Loaded once at startup and frozen: the monitor loop receives this object
    explicitly and never reads the environment itself.
    """

    # ── Containers ────────────────────────────────────────────────────────────
    TRACKED_CONTAINER: str = ""    # Name fragment of the container to measure
    RESTARTED_CONTAINER: str = ""  # Name fragment of the container to restart

    # ── Loop ──────────────────────────────────────────────────────────────────
    SLEEP_INTERVAL: int = 0        # Seconds between iterations
    CPU_THRESHOLD: float = 0.0     # Restart when CPU % is strictly above this

    # ── Logging ───────────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # Empty = console only

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    # ── Validators ────────────────────────────────────────────────────────────

    @field_validator("SLEEP_INTERVAL", mode="before")
    @classmethod
    def parse_sleep_interval(cls, v: Any) -> int:
        """Anything but a plain signed integer falls back to 0."""
        if isinstance(v, int) and not isinstance(v, bool):
            return v
        if isinstance(v, str) and _INT_RE.fullmatch(v):
            return int(v)
        return 0

    @field_validator("CPU_THRESHOLD", mode="before")
    @classmethod
    def parse_cpu_threshold(cls, v: Any) -> float:
        """Anything but a plain decimal (or inf/nan) falls back to 0.0."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return float(v)
        if isinstance(v, str) and _FLOAT_RE.fullmatch(v):
            return float(v)
        return 0.0

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of {allowed}, got '{v}'")
        return v.upper()

    @model_validator(mode="after")
    def validate_container_names(self) -> "Settings":
        """Both name fragments are required."""
        if not self.TRACKED_CONTAINER or not self.RESTARTED_CONTAINER:
            raise ValueError(
                "TRACKED_CONTAINER and RESTARTED_CONTAINER environment "
                "variables are required"
            )
        return self
