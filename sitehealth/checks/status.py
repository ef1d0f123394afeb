from __future__ import annotations

from enum import Enum

import typing as t

_SEVERITY = {"good": 0, "warning": 1, "critical": 2}


class HealthStatus(str, Enum):
    """Outcome of a single check.

    Ordering follows severity (``CRITICAL > WARNING > GOOD``) so ``max()``
    over a set of statuses yields the worst one.
    """

    CRITICAL = "critical"
    WARNING = "warning"
    GOOD = "good"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return str(self.value)

    @property
    def severity(self) -> int:
        return _SEVERITY[self.value]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, HealthStatus):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other: object) -> bool:
        if not isinstance(other, HealthStatus):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, HealthStatus):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, HealthStatus):
            return NotImplemented
        return self.severity >= other.severity

    @property
    def label(self) -> str:
        """Language key for the status label."""
        return f"COM_HEALTHCHECKER_STATUS_{self.name}"

    @property
    def icon(self) -> str:
        return {
            HealthStatus.CRITICAL: "fa-times-circle",
            HealthStatus.WARNING: "fa-exclamation-triangle",
            HealthStatus.GOOD: "fa-check-circle",
        }[self]

    @property
    def badge_class(self) -> str:
        return {
            HealthStatus.CRITICAL: "bg-danger",
            HealthStatus.WARNING: "bg-warning text-dark",
            HealthStatus.GOOD: "bg-success",
        }[self]

    @property
    def sort_order(self) -> int:
        # Critical results are listed first
        return 3 - self.severity

    @classmethod
    def worst(cls, statuses: t.Iterable[HealthStatus]) -> HealthStatus:
        return max(statuses, default=cls.GOOD)


__all__ = ["HealthStatus"]
