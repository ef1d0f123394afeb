"""Discovery events and the dispatcher plugins subscribe to.

The runner publishes three collection events in order (providers,
categories, checks). Every subscribed plugin may append any number of
entries to the event's result collector; the runner reads the accumulated
list once dispatch returns. The set of subscribers is open: the runner never
knows in advance which plugins are listening.

Features:
- Typed, append-only result collectors per event
- Sync or async handlers, ordered by priority then registration
- Subscriber objects declaring their handlers via ``get_subscribed_events``
"""

from __future__ import annotations

import inspect
import threading
from enum import Enum
from uuid import UUID, uuid4

import typing as t
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from sitehealth.categories import HealthCategory
from sitehealth.checks.base import HealthCheck
from sitehealth.errors import DiscoveryError, InvalidEventResultError
from sitehealth.logger import get_logger
from sitehealth.providers import ProviderMetadata

logger = get_logger(__name__)


class HealthCheckerEvents(str, Enum):
    COLLECT_PROVIDERS = "onHealthCheckerCollectProviders"
    COLLECT_CATEGORIES = "onHealthCheckerCollectCategories"
    COLLECT_CHECKS = "onHealthCheckerCollectChecks"
    BEFORE_REPORT_DISPLAY = "onHealthCheckerBeforeReportDisplay"

    @property
    def handler_method(self) -> str:
        return {
            HealthCheckerEvents.COLLECT_PROVIDERS: "on_collect_providers",
            HealthCheckerEvents.COLLECT_CATEGORIES: "on_collect_categories",
            HealthCheckerEvents.COLLECT_CHECKS: "on_collect_checks",
            HealthCheckerEvents.BEFORE_REPORT_DISPLAY: "on_before_report_display",
        }[self]


class Event(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    _stopped: bool = PrivateAttr(default=False)

    def stop_propagation(self) -> None:
        self._stopped = True

    @property
    def is_propagation_stopped(self) -> bool:
        return self._stopped


class ResultCollectingEvent(Event):
    """Event carrying an append-only list of typed contributions."""

    result_type: t.ClassVar[type]
    result_label: t.ClassVar[str]

    _results: list[t.Any] = PrivateAttr(default_factory=list)
    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    def type_check_result(self, value: t.Any) -> None:
        if not isinstance(value, self.result_type):
            raise InvalidEventResultError(self.name, self.result_label, value)

    def add_result(self, value: t.Any) -> None:
        self.type_check_result(value)
        with self._lock:
            self._results.append(value)

    @property
    def results(self) -> list[t.Any]:
        with self._lock:
            return list(self._results)

    def __len__(self) -> int:
        return len(self._results)


class CollectProvidersEvent(ResultCollectingEvent):
    result_type: t.ClassVar[type] = ProviderMetadata
    result_label: t.ClassVar[str] = "ProviderMetadata"

    name: str = HealthCheckerEvents.COLLECT_PROVIDERS.value

    def get_providers(self) -> list[ProviderMetadata]:
        return self.results


class CollectCategoriesEvent(ResultCollectingEvent):
    result_type: t.ClassVar[type] = HealthCategory
    result_label: t.ClassVar[str] = "HealthCategory"

    name: str = HealthCheckerEvents.COLLECT_CATEGORIES.value

    def get_categories(self) -> list[HealthCategory]:
        return self.results


class CollectChecksEvent(ResultCollectingEvent):
    result_type: t.ClassVar[type] = HealthCheck
    result_label: t.ClassVar[str] = "HealthCheck"

    name: str = HealthCheckerEvents.COLLECT_CHECKS.value

    def get_checks(self) -> list[HealthCheck]:
        return self.results


class BeforeReportDisplayEvent(Event):
    name: str = HealthCheckerEvents.BEFORE_REPORT_DISPLAY.value

    _html: list[str] = PrivateAttr(default_factory=list)

    def add_html_content(self, html: str) -> None:
        self._html.append(html)

    @property
    def html_content(self) -> str:
        return "\n".join(self._html)


EventHandler = t.Callable[[t.Any], t.Any]


class EventSubscription(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    subscription_id: UUID = Field(default_factory=uuid4)
    event_name: str
    handler: EventHandler
    priority: int = 0
    sequence: int = 0

    @property
    def handler_name(self) -> str:
        return getattr(self.handler, "__qualname__", repr(self.handler))


@t.runtime_checkable
class EventSubscriber(t.Protocol):
    def get_subscribed_events(self) -> t.Mapping[str, str]: ...


class EventDispatcher:
    """In-process publish/subscribe for health checker events."""

    def __init__(self) -> None:
        self._subscriptions: dict[str, list[EventSubscription]] = {}
        self._sequence = 0

    def subscribe(
        self,
        event_name: str | HealthCheckerEvents,
        handler: EventHandler,
        priority: int = 0,
    ) -> UUID:
        name = _event_name(event_name)
        self._sequence += 1
        subscription = EventSubscription(
            event_name=name,
            handler=handler,
            priority=priority,
            sequence=self._sequence,
        )
        self._subscriptions.setdefault(name, []).append(subscription)
        logger.debug(f"Subscribed {subscription.handler_name} to {name}")
        return subscription.subscription_id

    def unsubscribe(self, subscription_id: UUID) -> bool:
        for subs in self._subscriptions.values():
            for sub in subs:
                if sub.subscription_id == subscription_id:
                    subs.remove(sub)
                    return True
        return False

    def add_subscriber(self, subscriber: EventSubscriber) -> list[UUID]:
        """Register every handler a plugin declares in ``get_subscribed_events``."""
        ids = []
        for event_name, method_name in subscriber.get_subscribed_events().items():
            handler = getattr(subscriber, method_name, None)
            if handler is None:
                msg = (
                    f"{type(subscriber).__name__} declares handler "
                    f"'{method_name}' for {event_name} but does not define it"
                )
                raise DiscoveryError(msg)
            ids.append(self.subscribe(event_name, handler))
        return ids

    def listeners(self, event_name: str | HealthCheckerEvents) -> list[EventSubscription]:
        subs = self._subscriptions.get(_event_name(event_name), [])
        return sorted(subs, key=lambda s: (-s.priority, s.sequence))

    def has_listeners(self, event_name: str | HealthCheckerEvents) -> bool:
        return bool(self._subscriptions.get(_event_name(event_name)))

    def clear(self) -> None:
        self._subscriptions.clear()

    async def dispatch(self, event: Event) -> Event:
        """Call every listener of ``event.name``; handler errors propagate."""
        for subscription in self.listeners(event.name):
            if event.is_propagation_stopped:
                break
            try:
                outcome = subscription.handler(event)
                if inspect.isawaitable(outcome):
                    await outcome
            except DiscoveryError:
                raise
            except Exception as e:
                logger.error(
                    f"Handler {subscription.handler_name} failed on {event.name}: {e}",
                )
                msg = f"Dispatching {event.name} failed in {subscription.handler_name}: {e}"
                raise DiscoveryError(msg) from e
        return event


def _event_name(event_name: str | HealthCheckerEvents) -> str:
    if isinstance(event_name, HealthCheckerEvents):
        return event_name.value
    return event_name


__all__ = [
    "BeforeReportDisplayEvent",
    "CollectCategoriesEvent",
    "CollectChecksEvent",
    "CollectProvidersEvent",
    "Event",
    "EventDispatcher",
    "EventSubscriber",
    "EventSubscription",
    "HealthCheckerEvents",
    "ResultCollectingEvent",
]
