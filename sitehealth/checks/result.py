"""Result value objects produced by health checks."""

from __future__ import annotations

import typing as t
from pydantic import BaseModel, ConfigDict, Field

from .status import HealthStatus

RESULT_KEYS = ("slug", "title", "description", "status", "category", "provider")


class HealthCheckResult(BaseModel):
    """Immutable outcome of one check execution.

    Built by the check itself through ``good()``, ``warning()`` or
    ``critical()`` so that slug, category and provider always match the
    check that produced it. ``slug`` is ``{provider}.{check_name}`` by
    convention.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    health_status: HealthStatus
    title: str
    description: str
    slug: str = Field(min_length=1)
    category: str = Field(min_length=1)
    provider: str = Field(default="core", min_length=1)
    docs_url: str | None = None
    action_url: str | None = None

    @property
    def status(self) -> HealthStatus:
        return self.health_status

    def to_dict(self) -> dict[str, str]:
        """Flat mapping sent to the dashboard and stored in the cache."""
        return {
            "status": self.health_status.value,
            "title": self.title,
            "description": self.description,
            "slug": self.slug,
            "category": self.category,
            "provider": self.provider,
        }

    to_array = to_dict

    @classmethod
    def from_dict(cls, data: t.Mapping[str, t.Any]) -> HealthCheckResult:
        return cls(
            health_status=HealthStatus(data["status"]),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            slug=data["slug"],
            category=data["category"],
            provider=data.get("provider") or "core",
        )


class CheckOutcome(BaseModel):
    """Either a result or the fault that prevented one.

    ``AbstractHealthCheck.execute()`` returns this instead of letting the
    exception escape; ``run()`` then maps a fault to a warning result.
    """

    model_config = ConfigDict(frozen=True)

    result: HealthCheckResult | None = None
    fault: str | None = None
    fault_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None

    @classmethod
    def success(cls, result: HealthCheckResult) -> CheckOutcome:
        return cls(result=result)

    @classmethod
    def failure(cls, error: BaseException | str) -> CheckOutcome:
        if isinstance(error, BaseException):
            return cls(fault=str(error), fault_type=type(error).__name__)
        return cls(fault=error)


__all__ = ["RESULT_KEYS", "CheckOutcome", "HealthCheckResult"]
