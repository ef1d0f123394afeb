"""Checks against the site database."""

from __future__ import annotations

import re

from sitehealth.checks import AbstractHealthCheck, HealthCheckResult

MINIMUM_VERSIONS: dict[str, str] = {
    "MariaDB": "10.4.0",
    "MySQL": "8.0.13",
    "SQLite": "3.31.0",
    "PostgreSQL": "13.0",
}

_NUMERIC_VERSION = re.compile(r"(\d+\.\d+(?:\.\d+)?)")


class ConnectionCheck(AbstractHealthCheck):
    slug = "database.connection"
    category = "database"

    async def perform_check(self) -> HealthCheckResult:
        database = self.require_database()
        try:
            await database.execute("SELECT 1")
        except Exception as e:
            return self.critical(f"Database connection failed: {e}")
        return self.good("Database connection is working correctly.")


class ServerVersionCheck(AbstractHealthCheck):
    slug = "database.server_version"
    category = "database"

    async def perform_check(self) -> HealthCheckResult:
        version = await self.require_database().get_version()
        engine = server_engine(version)
        match = _NUMERIC_VERSION.search(version)
        numeric = match.group(1) if match else "0.0.0"
        minimum = MINIMUM_VERSIONS[engine]
        if version_tuple(numeric) < version_tuple(minimum):
            return self.warning(
                f"{engine} {numeric} is below recommended version {minimum}.",
            )
        return self.good(f"{engine} {numeric} meets requirements.")


def server_engine(version: str) -> str:
    lowered = version.lower()
    if "mariadb" in lowered:
        return "MariaDB"
    if lowered.startswith("sqlite"):
        return "SQLite"
    if lowered.startswith("postgresql"):
        return "PostgreSQL"
    return "MySQL"


def version_tuple(version: str) -> tuple[int, ...]:
    parts = tuple(int(p) for p in version.split("."))
    return parts + (0,) * (3 - len(parts))
