"""Aggregate of one evaluation pass.

A ``Report`` is what the dashboard renders and what the cache stores (as
``to_dict()`` output). Results are kept in display order: critical first,
then warning, then good, each band ordered by category sort order and,
within a category, by collection order.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime

import typing as t
from pydantic import BaseModel, ConfigDict, Field

from sitehealth.categories import CategoryRegistry, HealthCategory
from sitehealth.checks.result import HealthCheckResult
from sitehealth.checks.status import HealthStatus
from sitehealth.i18n import Translator, default_translator
from sitehealth.providers import ProviderMetadata, ProviderRegistry
from sitehealth.sanitizer import DescriptionSanitizer


class Report(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    results: tuple[HealthCheckResult, ...] = ()
    categories: tuple[HealthCategory, ...] = ()
    providers: tuple[ProviderMetadata, ...] = ()
    last_run: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def build(
        cls,
        results: t.Iterable[HealthCheckResult],
        categories: CategoryRegistry,
        providers: ProviderRegistry,
        last_run: datetime | None = None,
    ) -> Report:
        """Fold collected results into display order."""
        ordered = sorted(
            results,
            key=lambda r: (r.health_status.sort_order, categories.sort_key(r.category)),
        )
        return cls(
            results=tuple(ordered),
            categories=tuple(categories.all()),
            providers=tuple(providers.all()),
            last_run=last_run or datetime.now(UTC),
        )

    # Aggregates -------------------------------------------------------------

    @property
    def status(self) -> HealthStatus:
        """Worst status across all results; an empty report is good."""
        return HealthStatus.worst(r.health_status for r in self.results)

    def count(self, status: HealthStatus) -> int:
        return sum(1 for r in self.results if r.health_status is status)

    @property
    def counts(self) -> dict[str, int]:
        return {
            "critical": self.count(HealthStatus.CRITICAL),
            "warning": self.count(HealthStatus.WARNING),
            "good": self.count(HealthStatus.GOOD),
            "total": len(self.results),
        }

    def __len__(self) -> int:
        return len(self.results)

    def get_category(self, slug: str) -> HealthCategory | None:
        return next((c for c in self.categories if c.slug == slug), None)

    def get_result(self, slug: str) -> HealthCheckResult | None:
        return next((r for r in self.results if r.slug == slug), None)

    # Grouping ---------------------------------------------------------------

    def results_by_category(self) -> dict[str, list[HealthCheckResult]]:
        """Results grouped by category in category order.

        Categories without results are left out. Results whose category was
        never registered follow the known ones, in first-seen order.
        """
        grouped: dict[str, list[HealthCheckResult]] = {}
        for result in self.results:
            grouped.setdefault(result.category, []).append(result)
        ordered = {
            c.slug: grouped[c.slug]
            for c in sorted(self.categories, key=lambda c: (c.sort_order, c.slug))
            if c.slug in grouped
        }
        for slug, results in grouped.items():
            ordered.setdefault(slug, results)
        return ordered

    def results_by_status(self) -> dict[HealthStatus, list[HealthCheckResult]]:
        grouped: dict[HealthStatus, list[HealthCheckResult]] = {
            HealthStatus.CRITICAL: [],
            HealthStatus.WARNING: [],
            HealthStatus.GOOD: [],
        }
        for result in self.results:
            grouped[result.health_status].append(result)
        return grouped

    def filtered(
        self,
        status: HealthStatus | str | None = None,
        category: str | None = None,
    ) -> dict[str, list[HealthCheckResult]]:
        """``results_by_category()`` restricted to a status and/or category."""
        wanted = HealthStatus(status) if status is not None else None
        filtered: dict[str, list[HealthCheckResult]] = {}
        for slug, results in self.results_by_category().items():
            if category is not None and slug != category:
                continue
            kept = [r for r in results if wanted is None or r.health_status is wanted]
            if kept:
                filtered[slug] = kept
        return filtered

    # Serialization ----------------------------------------------------------

    def stats(self) -> dict[str, t.Any]:
        return {**self.counts, "lastRun": self.last_run.isoformat()}

    def to_dict(
        self,
        *,
        sanitize: bool = False,
        translator: Translator | None = None,
    ) -> dict[str, t.Any]:
        translator = translator or default_translator
        results = [_result_entry(r) for r in self.results]
        if sanitize:
            sanitizer = DescriptionSanitizer()
            for item in results:
                item["description"] = sanitizer.sanitize(item["description"])
        return {
            "lastRun": self.last_run.isoformat(),
            "status": self.status.value,
            "summary": self.counts,
            "categories": [c.to_dict(translator) for c in self.categories],
            "providers": [p.to_dict() for p in self.providers],
            "results": results,
        }

    to_array = to_dict

    def to_json(self, **kwargs: t.Any) -> str:
        return json.dumps(self.to_dict(**kwargs), indent=2)

    @classmethod
    def from_dict(cls, data: t.Mapping[str, t.Any]) -> Report:
        """Rebuild a report from ``to_dict()`` output, e.g. a cache entry."""
        categories = tuple(
            HealthCategory(
                slug=c["slug"],
                label=c.get("label") or c["slug"],
                icon=c.get("icon") or "",
                sort_order=int(c.get("sortOrder", 50)),
                logo_url=c.get("logoUrl"),
            )
            for c in data.get("categories", ())
        )
        providers = tuple(
            ProviderMetadata(
                slug=p["slug"],
                name=p.get("name") or p["slug"],
                description=p.get("description") or "",
                url=p.get("url"),
                icon=p.get("icon"),
                logo_url=p.get("logoUrl"),
                version=p.get("version"),
            )
            for p in data.get("providers", ())
        )
        return cls(
            results=tuple(_restore_result(r) for r in data["results"]),
            categories=categories,
            providers=providers,
            last_run=datetime.fromisoformat(data["lastRun"]),
        )



def _result_entry(result: HealthCheckResult) -> dict[str, t.Any]:
    return {**result.to_dict(), "docsUrl": result.docs_url, "actionUrl": result.action_url}


def _restore_result(data: t.Mapping[str, t.Any]) -> HealthCheckResult:
    return HealthCheckResult.from_dict(data).model_copy(
        update={"docs_url": data.get("docsUrl"), "action_url": data.get("actionUrl")},
    )


__all__ = ["Report"]
