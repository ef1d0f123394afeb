"""Checks against the host: disk, temp and log directories, interpreter."""

from __future__ import annotations

import os
import shutil
import sys
from datetime import date
from pathlib import Path

import typing as t

from sitehealth.checks import AbstractHealthCheck, HealthCheckResult

MB = 1024 * 1024

MINIMUM_PYTHON = (3, 12)

# Upstream end-of-life dates per minor release
PYTHON_EOL: dict[tuple[int, int], date] = {
    (3, 9): date(2025, 10, 31),
    (3, 10): date(2026, 10, 31),
    (3, 11): date(2027, 10, 31),
    (3, 12): date(2028, 10, 31),
    (3, 13): date(2029, 10, 31),
    (3, 14): date(2030, 10, 31),
}

EOL_WARNING_DAYS = 180


def format_bytes(size: float) -> str:
    units = ["B", "KB", "MB", "GB", "TB"]
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"


class DiskSpaceCheck(AbstractHealthCheck):
    slug = "system.disk_space"
    category = "system"

    critical_bytes: t.ClassVar[int] = 100 * MB
    warning_bytes: t.ClassVar[int] = 500 * MB

    def __init__(self, path: Path, **kwargs: t.Any) -> None:
        super().__init__(**kwargs)
        self.path = Path(path)

    async def perform_check(self) -> HealthCheckResult:
        try:
            usage = await self.run_blocking(shutil.disk_usage, self.path)
        except OSError:
            return self.warning("Unable to determine available disk space.")
        free = format_bytes(usage.free)
        if usage.free < self.critical_bytes:
            return self.critical(f"Disk space critically low: {free} free.")
        if usage.free < self.warning_bytes:
            return self.warning(f"Disk space is running low: {free} free.")
        return self.good(f"Disk space available: {free} free.")


class TempDirectoryCheck(AbstractHealthCheck):
    slug = "system.temp_directory"
    category = "system"

    def __init__(self, path: Path, **kwargs: t.Any) -> None:
        super().__init__(**kwargs)
        self.path = Path(path)

    async def perform_check(self) -> HealthCheckResult:
        if not self.path.is_dir():
            return self.critical(f"Temp directory does not exist: {self.path}")
        if not os.access(self.path, os.W_OK):
            return self.critical(f"Temp directory is not writable: {self.path}")
        return self.good("Temp directory exists and is writable.")


class LogFileSizeCheck(AbstractHealthCheck):
    slug = "system.log_file_size"
    category = "system"

    warning_bytes: t.ClassVar[int] = 100 * MB
    critical_bytes: t.ClassVar[int] = 500 * MB

    def __init__(self, path: Path, **kwargs: t.Any) -> None:
        super().__init__(**kwargs)
        self.path = Path(path)

    async def perform_check(self) -> HealthCheckResult:
        if not self.path.is_dir():
            return self.good("Log directory does not exist or is not accessible.")
        if not os.access(self.path, os.R_OK):
            return self.warning(f"Log directory is not readable: {self.path}")
        try:
            total = await self.run_blocking(directory_size, self.path)
        except OSError as e:
            return self.warning(f"Unable to calculate log directory size: {e}")
        size = format_bytes(total)
        if total > self.critical_bytes:
            return self.critical(
                f"Log directory is very large: {size}. Consider cleaning up old "
                "logs and investigating what is generating excessive log entries.",
            )
        if total > self.warning_bytes:
            return self.warning(
                f"Log directory is growing large: {size}. "
                "Consider reviewing and rotating logs.",
            )
        return self.good(f"Log directory size is manageable: {size}.")


def directory_size(path: Path) -> int:
    return sum(f.stat().st_size for f in path.rglob("*") if f.is_file())


class PythonVersionCheck(AbstractHealthCheck):
    slug = "system.python_version"
    category = "system"

    def __init__(
        self,
        version: tuple[int, int, int] | None = None,
        today: date | None = None,
        **kwargs: t.Any,
    ) -> None:
        super().__init__(**kwargs)
        self.version = version or t.cast(tuple[int, int, int], tuple(sys.version_info[:3]))
        self.today = today

    async def perform_check(self) -> HealthCheckResult:
        release = self.version[:2]
        label = ".".join(str(p) for p in self.version)
        if release < MINIMUM_PYTHON:
            minimum = ".".join(str(p) for p in MINIMUM_PYTHON)
            return self.critical(
                f"Python {label} is below the minimum supported version {minimum}.",
            )
        eol = PYTHON_EOL.get(release)
        today = self.today or date.today()
        if eol is not None and today >= eol:
            return self.critical(
                f"Python {label} reached end of life on {eol.isoformat()}. "
                "Upgrade to a supported release.",
            )
        if eol is not None and (eol - today).days <= EOL_WARNING_DAYS:
            return self.warning(
                f"Python {label} reaches end of life on {eol.isoformat()}. "
                "Plan an upgrade.",
            )
        return self.good(f"Python {label} is supported.")
