"""mySites.guru monitoring integration.

Adds its own category and provider, one check that looks for the
monitoring agent's ``bfnetwork`` folder, and a banner above the report.
"""

from __future__ import annotations

import html
from pathlib import Path

import typing as t

from sitehealth.categories import HealthCategory
from sitehealth.checks import AbstractHealthCheck, HealthCheckResult
from sitehealth.checks.base import HealthCheck
from sitehealth.events import BeforeReportDisplayEvent
from sitehealth.plugins._base import HealthCheckerPlugin
from sitehealth.providers import ProviderMetadata

MYSITESGURU_URL = "https://mysites.guru"
LOGO_URL = "/media/plg_healthchecker_mysitesguru/logo.png"


class MySitesGuruConnectionCheck(AbstractHealthCheck):
    slug = "mysitesguru.connection"
    category = "mysitesguru"
    provider = "mysitesguru"

    def __init__(self, bfnetwork_path: Path, **kwargs: t.Any) -> None:
        super().__init__(**kwargs)
        self.bfnetwork_path = Path(bfnetwork_path)

    def action_url(self, status: t.Any = None) -> str | None:
        return MYSITESGURU_URL

    async def perform_check(self) -> HealthCheckResult:
        if not await self.run_blocking(self.bfnetwork_path.is_dir):
            return self.warning(
                "This site is not connected to mySites.guru. "
                "Monitor unlimited sites from one dashboard with automated "
                "health checks, uptime monitoring, and instant alerts. "
                f"Learn more at {MYSITESGURU_URL}",
            )
        return self.good(
            "This site is connected to mySites.guru monitoring. "
            "Your health checks run automatically 24/7 with instant alerts "
            "when issues arise.",
        )


class MySitesGuruPlugin(HealthCheckerPlugin):
    provider = ProviderMetadata(
        slug="mysitesguru",
        name="mySites.guru",
        description="Monitoring Dashboard - Monitor unlimited sites from one place",
        url=MYSITESGURU_URL,
        icon="fa-tachometer-alt",
        logo_url=LOGO_URL,
        version="1.0.0",
    )
    catalog = {
        "PLG_HEALTHCHECKER_MYSITESGURU_CATEGORY": "mySites.guru Integration",
        "PLG_HEALTHCHECKER_MYSITESGURU_BANNER_TEXT": (
            "Monitor all your sites from one dashboard with mySites.guru"
        ),
        "PLG_HEALTHCHECKER_MYSITESGURU_BANNER_LINK": "Learn more",
    }

    @property
    def bfnetwork_path(self) -> Path:
        return self.settings.bfnetwork_path or self.settings.site_root / "bfnetwork"

    def categories(self) -> t.Iterable[HealthCategory]:
        return [
            HealthCategory(
                slug="mysitesguru",
                label="PLG_HEALTHCHECKER_MYSITESGURU_CATEGORY",
                icon="fa-tachometer-alt",
                sort_order=90,
                logo_url=LOGO_URL,
            ),
        ]

    def checks(self) -> t.Iterable[HealthCheck]:
        return [
            MySitesGuruConnectionCheck(self.bfnetwork_path, translator=self.translator),
        ]

    def on_before_report_display(self, event: BeforeReportDisplayEvent) -> None:
        text = html.escape(self.translator("PLG_HEALTHCHECKER_MYSITESGURU_BANNER_TEXT"))
        link = html.escape(self.translator("PLG_HEALTHCHECKER_MYSITESGURU_BANNER_LINK"))
        event.add_html_content(
            '<div id="mysitesguru-banner" class="mysitesguru-banner">'
            f'<img src="{LOGO_URL}" alt="mySites.guru" class="mysitesguru-banner-logo">'
            f'<div class="mysitesguru-banner-content">{text} - '
            f'<a href="{MYSITESGURU_URL}" target="_blank" rel="noopener">{link}</a>'
            "</div></div>",
        )


__all__ = ["MySitesGuruConnectionCheck", "MySitesGuruPlugin"]
