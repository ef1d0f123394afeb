"""The health check contract and the base class every built-in check uses.

A check is identified by ``slug`` (``{provider}.{check_name}``), grouped by
``category`` and owned by ``provider``. ``run()`` is total: whatever happens
inside ``perform_check()``, the caller receives a ``HealthCheckResult``.

Example::

    class ConnectionCheck(AbstractHealthCheck):
        slug = "database.connection"
        category = "database"

        async def perform_check(self) -> HealthCheckResult:
            db = self.require_database()
            await db.execute("SELECT 1")
            return self.good("Database connection is working correctly.")
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod

import asyncio
import typing as t

from sitehealth.errors import MissingCollaboratorError
from sitehealth.i18n import Translator, default_translator

from .result import CheckOutcome, HealthCheckResult
from .status import HealthStatus

if t.TYPE_CHECKING:
    from sitehealth.database import DatabaseProtocol


@t.runtime_checkable
class HealthCheck(t.Protocol):
    slug: str
    category: str
    provider: str

    @property
    def title(self) -> str: ...

    async def run(self) -> HealthCheckResult: ...


class AbstractHealthCheck(ABC):
    slug: t.ClassVar[str]
    category: t.ClassVar[str]
    provider: t.ClassVar[str] = "core"
    docs_url: t.ClassVar[str | None] = None

    def __init__(
        self,
        database: DatabaseProtocol | None = None,
        translator: Translator | None = None,
    ) -> None:
        self._database = database
        self._translator = translator or default_translator

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(slug={self.slug!r})"

    # Identity -------------------------------------------------------------

    def get_slug(self) -> str:
        return self.slug

    def get_category(self) -> str:
        return self.category

    def get_provider(self) -> str:
        return self.provider

    def get_title(self) -> str:
        return self.title

    @property
    def title_key(self) -> str:
        return f"COM_HEALTHCHECKER_CHECK_{self.slug.replace('.', '_').upper()}_TITLE"

    @property
    def title(self) -> str:
        """Translated title, or the slug when the catalog has no entry."""
        key = self.title_key
        translated = self._translator.translate(key)
        return translated if translated != key else self.slug

    def action_url(self, status: HealthStatus | None = None) -> str | None:
        """Page the result row links to; ``None`` keeps the row inert."""
        return None

    # Collaborators --------------------------------------------------------

    @property
    def database(self) -> DatabaseProtocol | None:
        return self._database

    def with_database(self, database: DatabaseProtocol) -> t.Self:
        clone = copy.copy(self)
        clone._database = database
        return clone

    def require_database(self) -> DatabaseProtocol:
        if self._database is None:
            raise MissingCollaboratorError(self.slug, "database")
        return self._database

    # Execution ------------------------------------------------------------

    @abstractmethod
    async def perform_check(self) -> HealthCheckResult:
        """Compute the result. Exceptions raised here are captured by ``run()``."""

    async def execute(self) -> CheckOutcome:
        try:
            result = await self.perform_check()
        except Exception as e:
            return CheckOutcome.failure(e)
        return CheckOutcome.success(result)

    async def run(self) -> HealthCheckResult:
        outcome = await self.execute()
        if outcome.result is not None:
            return outcome.result
        return self.warning(
            self._translator.format("COM_HEALTHCHECKER_CHECK_ERROR", outcome.fault),
        )

    # Result helpers -------------------------------------------------------

    def _result(self, status: HealthStatus, description: str) -> HealthCheckResult:
        return HealthCheckResult(
            health_status=status,
            title=self.title,
            description=description,
            slug=self.slug,
            category=self.category,
            provider=self.provider,
            docs_url=self.docs_url,
            action_url=self.action_url(status),
        )

    def critical(self, description: str) -> HealthCheckResult:
        return self._result(HealthStatus.CRITICAL, description)

    def warning(self, description: str) -> HealthCheckResult:
        return self._result(HealthStatus.WARNING, description)

    def good(self, description: str) -> HealthCheckResult:
        return self._result(HealthStatus.GOOD, description)

    @staticmethod
    async def run_blocking(
        func: t.Callable[..., t.Any],
        *args: t.Any,
    ) -> t.Any:
        """Run blocking filesystem or socket work off the event loop."""
        return await asyncio.to_thread(func, *args)


CheckFunction = t.Callable[[AbstractHealthCheck], t.Awaitable[HealthCheckResult]]


class FunctionalHealthCheck(AbstractHealthCheck):
    """Check built from a coroutine function, see ``health_check``."""

    def __init__(
        self,
        func: CheckFunction,
        slug: str,
        category: str,
        provider: str = "core",
        database: DatabaseProtocol | None = None,
        translator: Translator | None = None,
    ) -> None:
        super().__init__(database=database, translator=translator)
        self._func = func
        # Instance attributes shadow the class-level identity
        self.slug = slug  # type: ignore[misc]
        self.category = category  # type: ignore[misc]
        self.provider = provider  # type: ignore[misc]

    async def perform_check(self) -> HealthCheckResult:
        return await self._func(self)


def health_check(
    slug: str,
    category: str,
    provider: str = "core",
) -> t.Callable[[CheckFunction], FunctionalHealthCheck]:
    """Decorator turning ``async def fn(check) -> HealthCheckResult`` into a check."""

    def decorator(func: CheckFunction) -> FunctionalHealthCheck:
        return FunctionalHealthCheck(
            func,
            slug=slug,
            category=category,
            provider=provider,
        )

    return decorator


__all__ = [
    "AbstractHealthCheck",
    "FunctionalHealthCheck",
    "HealthCheck",
    "health_check",
]
