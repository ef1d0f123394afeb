"""Configuration for pytest testing framework."""

import os
from pathlib import Path

import pytest

from sitehealth.config import HealthCheckerSettings
from sitehealth.events import EventDispatcher
from sitehealth.i18n import Translator
from sitehealth.runner import HealthCheckRunner
from tests.utils import SpyCache, SpyDispatcher


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer ``SITEHEALTH_*`` variables out of the tests."""
    for key in list(os.environ):
        if key.startswith("SITEHEALTH_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings(tmp_path: Path) -> HealthCheckerSettings:
    return HealthCheckerSettings(
        site_root=tmp_path,
        check_timeout=5.0,
        run_timeout=10.0,
    )


@pytest.fixture
def translator() -> Translator:
    return Translator()


@pytest.fixture
def dispatcher() -> SpyDispatcher:
    return SpyDispatcher()


@pytest.fixture
def cache() -> SpyCache:
    return SpyCache()


@pytest.fixture
def runner(
    dispatcher: EventDispatcher,
    cache: SpyCache,
    settings: HealthCheckerSettings,
    translator: Translator,
) -> HealthCheckRunner:
    return HealthCheckRunner(
        dispatcher,
        cache=cache,
        settings=settings,
        translator=translator,
    )
