from __future__ import annotations

from uuid import UUID

import typing as t

from sitehealth.categories import HealthCategory
from sitehealth.config import HealthCheckerSettings
from sitehealth.events import (
    CollectCategoriesEvent,
    CollectChecksEvent,
    CollectProvidersEvent,
    EventDispatcher,
    HealthCheckerEvents,
)
from sitehealth.i18n import Translator
from sitehealth.logger import get_logger

if t.TYPE_CHECKING:
    from sitehealth.checks.base import HealthCheck
    from sitehealth.providers import ProviderMetadata


class HealthCheckerPlugin:
    """Base for plugins contributing providers, categories and checks.

    Subclasses set ``provider`` and override ``categories()`` and
    ``checks()``. Handlers are discovered by name: any
    ``HealthCheckerEvents.handler_method`` the plugin defines is subscribed
    by ``register()``.
    """

    provider: t.ClassVar[ProviderMetadata]
    catalog: t.ClassVar[t.Mapping[str, str]] = {}

    def __init__(
        self,
        settings: HealthCheckerSettings | None = None,
        translator: Translator | None = None,
    ) -> None:
        self.settings = settings or HealthCheckerSettings()
        self.translator = translator or Translator()
        if self.catalog:
            self.translator.load(self.catalog)
        self.logger = get_logger(type(self).__module__)

    def get_subscribed_events(self) -> dict[str, str]:
        return {
            event.value: event.handler_method
            for event in HealthCheckerEvents
            if callable(getattr(self, event.handler_method, None))
        }

    def register(self, dispatcher: EventDispatcher) -> list[UUID]:
        return dispatcher.add_subscriber(self)

    def categories(self) -> t.Iterable[HealthCategory]:
        return ()

    def checks(self) -> t.Iterable[HealthCheck]:
        return ()

    def on_collect_providers(self, event: CollectProvidersEvent) -> None:
        event.add_result(self.provider)

    def on_collect_categories(self, event: CollectCategoriesEvent) -> None:
        for category in self.categories():
            event.add_result(category)

    def on_collect_checks(self, event: CollectChecksEvent) -> None:
        for check in self.checks():
            event.add_result(check)
