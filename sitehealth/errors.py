"""Exception types for the health checker.

Three families matter to callers:

- check-level faults (``CheckFaultError``) are raised inside a check and are
  always recovered by the check's own ``run()`` guard;
- discovery and cache faults (``DiscoveryError``, ``CacheBackendError``)
  propagate out of the runner untouched;
- configuration faults (``ConfigurationError``) fail fast at the point of use.
"""

import typing as t


class SiteHealthError(Exception):
    """Base exception for the sitehealth package."""


class CheckFaultError(SiteHealthError):
    """Raised while a single check computes its result."""

    def __init__(self, message: str, slug: str | None = None) -> None:
        super().__init__(message)
        self.slug = slug


class MissingCollaboratorError(CheckFaultError):
    """Raised when a check needs a collaborator it was not given."""

    def __init__(self, slug: str, collaborator: str) -> None:
        self.collaborator = collaborator
        message = (
            f"Health check {slug} requires {collaborator} access "
            f"but no {collaborator} was injected."
        )
        super().__init__(message, slug=slug)


class DiscoveryError(SiteHealthError):
    """Raised when a discovery event cannot be dispatched."""


class InvalidEventResultError(DiscoveryError, TypeError):
    """Raised when a plugin appends the wrong type to a discovery event."""

    def __init__(self, event_name: str, expected: str, value: t.Any) -> None:
        self.event_name = event_name
        self.expected = expected
        message = (
            f"Event {event_name} only accepts {expected} instances. "
            f"Got {type(value).__name__}."
        )
        super().__init__(message)


class CacheBackendError(SiteHealthError):
    """Raised when the report cache backend fails."""

    def __init__(self, operation: str, key: str, cause: BaseException) -> None:
        self.operation = operation
        self.key = key
        super().__init__(f"Cache {operation} failed for key '{key}': {cause}")


class ConfigurationError(SiteHealthError):
    """Raised when the health checker is used before it is set up."""


class RunnerNotInitializedError(ConfigurationError):
    """Raised when report data is requested before any evaluation pass."""

    def __init__(self, attribute: str = "report") -> None:
        self.attribute = attribute
        super().__init__(
            f"HealthCheckRunner has no {attribute} yet; call run_all() first",
        )


class NoChecksAvailableError(SiteHealthError):
    """Raised when discovery produced no checks at all."""


__all__ = [
    "CacheBackendError",
    "CheckFaultError",
    "ConfigurationError",
    "DiscoveryError",
    "InvalidEventResultError",
    "MissingCollaboratorError",
    "NoChecksAvailableError",
    "RunnerNotInitializedError",
    "SiteHealthError",
]
