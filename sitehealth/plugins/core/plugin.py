from __future__ import annotations

import tempfile
from pathlib import Path

import typing as t

from sitehealth.categories import CORE_CATEGORIES, HealthCategory
from sitehealth.checks.base import HealthCheck
from sitehealth.plugins._base import HealthCheckerPlugin
from sitehealth.providers import ProviderMetadata

from .database import ConnectionCheck, ServerVersionCheck
from .system import DiskSpaceCheck, LogFileSizeCheck, PythonVersionCheck, TempDirectoryCheck


class CorePlugin(HealthCheckerPlugin):
    """Built-in provider: the eight core categories and the core checks."""

    provider = ProviderMetadata(
        slug="core",
        name="Core",
        description="Built-in health checks for the site, its host and database",
        icon="fa-heartbeat",
        version="1.0.0",
    )

    @property
    def temp_path(self) -> Path:
        return self.settings.temp_path or Path(tempfile.gettempdir())

    @property
    def log_path(self) -> Path:
        return self.settings.log_path or self.settings.site_root / "logs"

    def categories(self) -> t.Iterable[HealthCategory]:
        return CORE_CATEGORIES

    def checks(self) -> t.Iterable[HealthCheck]:
        kwargs = {"translator": self.translator}
        return [
            ConnectionCheck(**kwargs),
            ServerVersionCheck(**kwargs),
            DiskSpaceCheck(self.settings.site_root, **kwargs),
            TempDirectoryCheck(self.temp_path, **kwargs),
            LogFileSizeCheck(self.log_path, **kwargs),
            PythonVersionCheck(**kwargs),
        ]
