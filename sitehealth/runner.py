"""Orchestration of an evaluation pass.

``HealthCheckRunner.run_all()`` is the entry point the dashboard and the CLI
use:

1. serve the cached report when caching is enabled and a fresh entry exists;
2. reset the registries and publish the providers, categories and checks
   discovery events, in that order;
3. run every collected check under a per-check timeout, optionally several
   at a time, all bounded by a watchdog for the whole pass;
4. fold the results into a ``Report`` and store it in the cache.

A failing, hanging or misbehaving check only ever costs its own row, which
degrades to a warning. Dispatch and cache failures are environment faults
and propagate to the caller.
"""

from __future__ import annotations

import inspect
from datetime import UTC, datetime

import asyncio
import typing as t
from pydantic import ValidationError

from sitehealth.categories import CategoryRegistry
from sitehealth.checks.base import AbstractHealthCheck, HealthCheck
from sitehealth.checks.result import HealthCheckResult
from sitehealth.checks.status import HealthStatus
from sitehealth.config import HealthCheckerSettings
from sitehealth.errors import NoChecksAvailableError, RunnerNotInitializedError
from sitehealth.events import (
    BeforeReportDisplayEvent,
    CollectCategoriesEvent,
    CollectChecksEvent,
    CollectProvidersEvent,
    EventDispatcher,
)
from sitehealth.i18n import Translator, default_translator
from sitehealth.logger import get_logger
from sitehealth.providers import ProviderRegistry
from sitehealth.report import Report

if t.TYPE_CHECKING:
    from sitehealth.cache import ReportCacheProtocol
    from sitehealth.database import DatabaseProtocol

logger = get_logger(__name__)

CACHE_KEY = "healthcheck_results"


class HealthCheckRunner:
    def __init__(
        self,
        dispatcher: EventDispatcher,
        cache: ReportCacheProtocol | None = None,
        database: DatabaseProtocol | None = None,
        settings: HealthCheckerSettings | None = None,
        translator: Translator | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._cache = cache
        self._database = database
        self.settings = settings or HealthCheckerSettings()
        self._translator = translator or default_translator
        self._categories = CategoryRegistry()
        self._providers = ProviderRegistry()
        self._last_report: Report | None = None

    @property
    def category_registry(self) -> CategoryRegistry:
        return self._categories

    @property
    def provider_registry(self) -> ProviderRegistry:
        return self._providers

    @property
    def last_report(self) -> Report:
        if self._last_report is None:
            raise RunnerNotInitializedError("report")
        return self._last_report

    @property
    def translator(self) -> Translator:
        return self._translator

    @property
    def caching_enabled(self) -> bool:
        return self._cache is not None and self.settings.caching_enabled

    # Full passes ------------------------------------------------------------

    async def run_all(self, force_refresh: bool = False) -> Report:
        """Return the site report, served from the cache when possible."""
        if self.caching_enabled and not force_refresh:
            cached = await self._load_cached()
            if cached is not None:
                logger.debug(f"Serving report from cache ({CACHE_KEY})")
                self._last_report = cached
                return cached

        report = await self.run()

        if self.caching_enabled:
            await self._cache.set(  # type: ignore[union-attr]
                CACHE_KEY,
                report.to_dict(translator=self._translator),
                ttl=self.settings.cache_duration,
            )
        return report

    async def run(self) -> Report:
        """Run a full uncached pass."""
        started = datetime.now(UTC)
        checks = await self.discover()
        logger.info(f"Running {len(checks)} health checks")
        results = await self.execute(checks)
        report = Report.build(
            results,
            self._categories,
            self._providers,
            last_run=started,
        )
        self._last_report = report
        counts = report.counts
        logger.info(
            f"Health check pass finished: {counts['critical']} critical, "
            f"{counts['warning']} warning, {counts['good']} good",
        )
        return report

    async def _load_cached(self) -> Report | None:
        data = await self._cache.get(CACHE_KEY)  # type: ignore[union-attr]
        if not isinstance(data, dict) or "results" not in data or "lastRun" not in data:
            return None
        try:
            return Report.from_dict(data)
        except (ValidationError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring unreadable cached report: {e}")
            return None

    async def clear_cache(self) -> None:
        if self._cache is not None:
            await self._cache.clear()

    async def get_stats(self, force_refresh: bool = False) -> dict[str, t.Any]:
        report = await self.run_all(force_refresh=force_refresh)
        return report.stats()

    # Discovery --------------------------------------------------------------

    async def collect_providers(self) -> None:
        event = await self._dispatcher.dispatch(CollectProvidersEvent())
        for provider in t.cast(CollectProvidersEvent, event).get_providers():
            self._providers.register(provider)

    async def collect_categories(self) -> None:
        event = await self._dispatcher.dispatch(CollectCategoriesEvent())
        for category in t.cast(CollectCategoriesEvent, event).get_categories():
            self._categories.register(category)

    async def collect_checks(self) -> list[HealthCheck]:
        event = await self._dispatcher.dispatch(CollectChecksEvent())
        checks = []
        for check in t.cast(CollectChecksEvent, event).get_checks():
            if not self.settings.is_check_enabled(check.slug):
                logger.debug(f"Skipping disabled check {check.slug}")
                continue
            checks.append(self._prepare(check))
        return checks

    async def discover(self) -> list[HealthCheck]:
        """Rebuild the registries and return the checks to run."""
        self._providers.reset()
        self._categories.reset()
        await self.collect_providers()
        await self.collect_categories()
        return await self.collect_checks()

    def _prepare(self, check: HealthCheck) -> HealthCheck:
        if (
            isinstance(check, AbstractHealthCheck)
            and check.database is None
            and self._database is not None
        ):
            return check.with_database(self._database)
        return check

    # Partial runs -----------------------------------------------------------

    async def run_single_check(self, slug: str) -> HealthCheckResult | None:
        for check in await self.discover():
            if check.slug == slug:
                return await self._run_guarded(check)
        return None

    async def run_category(self, category: str) -> dict[str, dict[str, str]]:
        checks = [c for c in await self.discover() if c.category == category]
        results = await self.execute(checks)
        return {r.slug: r.to_dict() for r in results}

    async def get_metadata(self) -> dict[str, t.Any]:
        """Categories, providers and the check list without running anything."""
        checks = await self.discover()
        if not checks:
            raise NoChecksAvailableError(
                self._translator.translate("COM_HEALTHCHECKER_NO_CHECKS_AVAILABLE"),
            )
        return {
            "categories": [c.to_dict(self._translator) for c in self._categories.all()],
            "providers": [p.to_dict() for p in self._providers.all()],
            "checks": [
                {
                    "slug": check.slug,
                    "category": check.category,
                    "title": _safe_title(check),
                }
                for check in checks
            ],
        }

    async def collect_report_html(self) -> str:
        """Extra markup plugins want shown above the report."""
        event = await self._dispatcher.dispatch(BeforeReportDisplayEvent())
        return t.cast(BeforeReportDisplayEvent, event).html_content

    # Execution --------------------------------------------------------------

    async def execute(self, checks: t.Sequence[HealthCheck]) -> list[HealthCheckResult]:
        """Run checks and return their results in the order given.

        At most ``max_concurrency`` checks run at once. Checks still running
        when ``run_timeout`` expires are cancelled and reported as warnings.
        """
        if not checks:
            return []

        results: list[HealthCheckResult | None] = [None] * len(checks)
        semaphore = asyncio.Semaphore(self.settings.max_concurrency)

        async def worker(index: int, check: HealthCheck) -> None:
            async with semaphore:
                results[index] = await self._run_guarded(check)

        tasks = [
            asyncio.create_task(worker(index, check), name=f"healthcheck:{check.slug}")
            for index, check in enumerate(checks)
        ]
        try:
            _, pending = await asyncio.wait(tasks, timeout=self.settings.run_timeout)
            if pending:
                logger.warning(
                    f"{len(pending)} health checks still running after "
                    f"{self.settings.run_timeout}s, cancelling",
                )
        finally:
            # Also reached when the caller cancels the pass
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        final: list[HealthCheckResult] = []
        for index, check in enumerate(checks):
            result = results[index]
            if result is None:
                result = _fault_result(
                    check,
                    self._translator.format(
                        "COM_HEALTHCHECKER_RUN_TIMEOUT",
                        self.settings.run_timeout,
                    ),
                )
            final.append(result)
        return final

    async def _run_guarded(self, check: HealthCheck) -> HealthCheckResult:
        timeout = self.settings.check_timeout
        scope = asyncio.timeout(timeout)
        try:
            async with scope:
                result = await _invoke(check)
        except TimeoutError as e:
            if not scope.expired():
                return self._failed(check, e)
            logger.warning(f"Health check {check.slug} timed out after {timeout}s")
            return _fault_result(
                check,
                self._translator.format("COM_HEALTHCHECKER_CHECK_TIMEOUT", timeout),
            )
        except Exception as e:
            return self._failed(check, e)
        if not isinstance(result, HealthCheckResult):
            logger.warning(
                f"Health check {check.slug} returned {type(result).__name__}",
            )
            return _fault_result(
                check,
                self._translator.format(
                    "COM_HEALTHCHECKER_CHECK_ERROR",
                    f"expected HealthCheckResult, got {type(result).__name__}",
                ),
            )
        return result

    def _failed(self, check: HealthCheck, error: Exception) -> HealthCheckResult:
        logger.warning(f"Health check {check.slug} failed: {error}")
        return _fault_result(
            check,
            self._translator.format("COM_HEALTHCHECKER_CHECK_ERROR", str(error)),
        )


async def _invoke(check: HealthCheck) -> t.Any:
    outcome = check.run()
    if inspect.isawaitable(outcome):
        return await outcome
    return outcome


def _safe_title(check: HealthCheck) -> str:
    try:
        return check.title
    except Exception:
        return check.slug


def _fault_result(check: HealthCheck, description: str) -> HealthCheckResult:
    return HealthCheckResult(
        health_status=HealthStatus.WARNING,
        title=_safe_title(check),
        description=description,
        slug=check.slug,
        category=check.category,
        provider=check.provider,
    )


__all__ = ["CACHE_KEY", "HealthCheckRunner"]
