"""Database collaborator handed to checks that query the site database."""

import typing as t
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine


@t.runtime_checkable
class DatabaseProtocol(t.Protocol):
    async def execute(self, query: str) -> t.Any: ...

    async def fetch_all(
        self,
        query: str,
        params: t.Mapping[str, t.Any] | None = None,
    ) -> list[dict[str, t.Any]]: ...

    async def get_version(self) -> str: ...


class SQLDatabase:
    """``DatabaseProtocol`` over a SQLAlchemy async engine."""

    _version_queries: t.ClassVar[dict[str, str]] = {
        "sqlite": "SELECT sqlite_version()",
        "postgresql": "SHOW server_version",
        "mysql": "SELECT VERSION()",
        "mariadb": "SELECT VERSION()",
    }

    _version_prefixes: t.ClassVar[dict[str, str]] = {
        "sqlite": "SQLite",
        "postgresql": "PostgreSQL",
    }

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    @classmethod
    def from_url(cls, url: str, **engine_kwargs: t.Any) -> "SQLDatabase":
        return cls(create_async_engine(url, **engine_kwargs))

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def dialect(self) -> str:
        return self._engine.dialect.name

    async def execute(self, query: str) -> bool:
        async with self._engine.connect() as conn:
            await conn.execute(text(query))
        return True

    async def fetch_all(
        self,
        query: str,
        params: t.Mapping[str, t.Any] | None = None,
    ) -> list[dict[str, t.Any]]:
        async with self._engine.connect() as conn:
            result = await conn.execute(text(query), dict(params or {}))
            return [dict(row) for row in result.mappings().all()]

    async def get_version(self) -> str:
        query = self._version_queries.get(self.dialect, "SELECT VERSION()")
        async with self._engine.connect() as conn:
            value = (await conn.execute(text(query))).scalar()
        version = str(value or "")
        prefix = self._version_prefixes.get(self.dialect)
        return f"{prefix} {version}" if prefix else version

    async def dispose(self) -> None:
        await self._engine.dispose()


__all__ = ["DatabaseProtocol", "SQLDatabase"]
