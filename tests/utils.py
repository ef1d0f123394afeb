"""Test doubles shared by the sitehealth tests."""

import asyncio
import typing as t

from sitehealth.categories import HealthCategory
from sitehealth.checks import AbstractHealthCheck, HealthCheckResult, HealthStatus
from sitehealth.events import Event, EventDispatcher
from sitehealth.plugins import HealthCheckerPlugin
from sitehealth.providers import ProviderMetadata


class StaticCheck(AbstractHealthCheck):
    """Check returning a fixed status, optionally after a delay."""

    def __init__(
        self,
        slug: str,
        status: HealthStatus = HealthStatus.GOOD,
        category: str = "system",
        description: str = "ok",
        provider: str = "core",
        delay: float = 0.0,
        calls: list[str] | None = None,
        link: str | None = None,
        **kwargs: t.Any,
    ) -> None:
        super().__init__(**kwargs)
        self.slug = slug  # type: ignore[misc]
        self.category = category  # type: ignore[misc]
        self.provider = provider  # type: ignore[misc]
        self.status = status
        self.description = description
        self.delay = delay
        self.calls = calls if calls is not None else []
        self.link = link

    def action_url(self, status: HealthStatus | None = None) -> str | None:
        return self.link

    async def perform_check(self) -> HealthCheckResult:
        self.calls.append(self.slug)
        if self.delay:
            await asyncio.sleep(self.delay)
        return self._result(self.status, self.description)


class RaisingCheck(StaticCheck):
    def __init__(self, slug: str, message: str = "boom", **kwargs: t.Any) -> None:
        super().__init__(slug, **kwargs)
        self.message = message

    async def perform_check(self) -> HealthCheckResult:
        self.calls.append(self.slug)
        raise RuntimeError(self.message)


class BareCheck:
    """Implements the check protocol without the base class guard."""

    def __init__(
        self,
        slug: str = "thirdparty.bare",
        category: str = "system",
        provider: str = "thirdparty",
        error: Exception | None = None,
        result: t.Any = None,
    ) -> None:
        self.slug = slug
        self.category = category
        self.provider = provider
        self.error = error
        self.result = result

    @property
    def title(self) -> str:
        return "Bare check"

    async def run(self) -> t.Any:
        if self.error is not None:
            raise self.error
        return self.result


class StubPlugin(HealthCheckerPlugin):
    """Plugin contributing whatever it is given."""

    def __init__(
        self,
        checks: t.Iterable[t.Any] = (),
        categories: t.Iterable[HealthCategory] = (),
        provider: ProviderMetadata | None = None,
        **kwargs: t.Any,
    ) -> None:
        super().__init__(**kwargs)
        self._checks = list(checks)
        self._categories = list(categories)
        self.provider = provider or ProviderMetadata(slug="stub", name="Stub")  # type: ignore[misc]

    def categories(self) -> list[HealthCategory]:
        return self._categories

    def checks(self) -> list[t.Any]:
        return self._checks


class SpyDispatcher(EventDispatcher):
    def __init__(self) -> None:
        super().__init__()
        self.dispatched: list[str] = []

    async def dispatch(self, event: Event) -> Event:
        self.dispatched.append(event.name)
        return await super().dispatch(event)


class SpyCache:
    """Dict-backed ``ReportCacheProtocol`` recording every call."""

    def __init__(self) -> None:
        self.store: dict[str, t.Any] = {}
        self.ttls: dict[str, int | None] = {}
        self.calls: list[str] = []

    async def get(self, key: str) -> t.Any:
        self.calls.append("get")
        return self.store.get(key)

    async def set(self, key: str, value: t.Any, ttl: int | None = None) -> None:
        self.calls.append("set")
        self.store[key] = value
        self.ttls[key] = ttl

    async def delete(self, key: str) -> bool:
        self.calls.append("delete")
        return self.store.pop(key, None) is not None

    async def clear(self) -> bool:
        self.calls.append("clear")
        self.store.clear()
        return True


class BrokenCache(SpyCache):
    def __init__(self, error: Exception) -> None:
        super().__init__()
        self.error = error

    async def get(self, key: str) -> t.Any:
        raise self.error


class MockDatabase:
    def __init__(self, version: str = "8.0.36", error: Exception | None = None) -> None:
        self.version = version
        self.error = error
        self.queries: list[str] = []

    async def execute(self, query: str) -> bool:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return True

    async def fetch_all(
        self,
        query: str,
        params: t.Mapping[str, t.Any] | None = None,
    ) -> list[dict[str, t.Any]]:
        self.queries.append(query)
        return []

    async def get_version(self) -> str:
        if self.error is not None:
            raise self.error
        return self.version
