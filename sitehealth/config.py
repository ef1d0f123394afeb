"""Settings for the health checker.

Values come from keyword arguments first and ``SITEHEALTH_*`` environment
variables second, e.g. ``SITEHEALTH_CACHE_DURATION=300``.
"""

from pathlib import Path

import typing as t
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class HealthCheckerSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SITEHEALTH_",
        extra="ignore",
        validate_default=True,
    )

    # Module display flags
    show_critical: bool = True
    show_warning: bool = True
    show_good: bool = True

    # Report caching
    enable_cache: bool = True
    cache_duration: int = Field(
        default=900,
        ge=0,
        description="Seconds a report stays cached; 0 disables caching",
    )

    # Execution limits
    check_timeout: float | None = Field(
        default=30.0,
        description="Per-check timeout in seconds; None disables it",
    )
    run_timeout: float | None = Field(
        default=300.0,
        description="Watchdog for the whole pass in seconds; None disables it",
    )
    max_concurrency: int = Field(default=1, ge=1)

    disabled_checks: list[str] = Field(default_factory=list)

    # Filesystem locations probed by the built-in checks
    site_root: Path = Field(default_factory=Path.cwd)
    temp_path: Path | None = None
    log_path: Path | None = None
    bfnetwork_path: Path | None = None

    log_level: str = "INFO"

    @field_validator("check_timeout", "run_timeout")
    @classmethod
    def positive_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            msg = "timeouts must be positive or None"
            raise ValueError(msg)
        return v

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.upper()

    @property
    def caching_enabled(self) -> bool:
        return self.enable_cache and self.cache_duration > 0

    def is_check_enabled(self, slug: str) -> bool:
        return slug not in self.disabled_checks

    def module_config(self) -> dict[str, t.Any]:
        """Return the configuration surface read by the dashboard module."""
        return {
            "showCritical": self.show_critical,
            "showWarning": self.show_warning,
            "showGood": self.show_good,
            "enableCache": self.enable_cache,
            "cacheDuration": self.cache_duration,
        }


__all__ = ["HealthCheckerSettings"]
