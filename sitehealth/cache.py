"""Report cache used by the runner to memoize a full evaluation pass.

Only JSON-compatible mappings are stored. A cached report is rebuilt with
``Report.from_dict`` rather than unpickled, so a poisoned cache entry can at
worst produce a malformed report, never execute code.
"""

import typing as t
from aiocache.backends.memory import SimpleMemoryCache
from aiocache.serializers import JsonSerializer

from sitehealth.errors import CacheBackendError
from sitehealth.logger import get_logger

logger = get_logger(__name__)

DEFAULT_NAMESPACE = "sitehealth:"


@t.runtime_checkable
class ReportCacheProtocol(t.Protocol):
    async def get(self, key: str) -> t.Any: ...

    async def set(self, key: str, value: t.Any, ttl: int | None = None) -> None: ...

    async def delete(self, key: str) -> bool: ...

    async def clear(self) -> bool: ...


class MemoryReportCache:
    """In-process cache backed by aiocache's ``SimpleMemoryCache``."""

    def __init__(self, namespace: str = DEFAULT_NAMESPACE, **kwargs: t.Any) -> None:
        self._namespace = namespace
        self._init_kwargs = kwargs
        self._client: SimpleMemoryCache | None = None

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def _cache(self) -> SimpleMemoryCache:
        if self._client is None:
            cache = SimpleMemoryCache(
                serializer=JsonSerializer(),
                namespace=self._namespace,
                **self._init_kwargs,
            )
            cache.timeout = 0.0
            self._client = cache
        return self._client

    async def get(self, key: str) -> t.Any:
        try:
            return await self._cache.get(key)
        except Exception as e:
            raise CacheBackendError("get", key, e) from e

    async def set(self, key: str, value: t.Any, ttl: int | None = None) -> None:
        try:
            await self._cache.set(key, value, ttl=ttl)
        except Exception as e:
            raise CacheBackendError("set", key, e) from e
        logger.debug(f"Cached {key} for {ttl}s")

    async def delete(self, key: str) -> bool:
        try:
            return bool(await self._cache.delete(key))
        except Exception as e:
            raise CacheBackendError("delete", key, e) from e

    async def exists(self, key: str) -> bool:
        try:
            return bool(await self._cache.exists(key))
        except Exception as e:
            raise CacheBackendError("exists", key, e) from e

    async def clear(self) -> bool:
        try:
            return bool(await self._cache.clear(namespace=self._namespace))
        except Exception as e:
            raise CacheBackendError("clear", self._namespace, e) from e

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None


__all__ = ["DEFAULT_NAMESPACE", "MemoryReportCache", "ReportCacheProtocol"]
