from sitehealth.cache import MemoryReportCache, ReportCacheProtocol
from sitehealth.categories import CORE_CATEGORIES, CategoryRegistry, HealthCategory
from sitehealth.checks import (
    AbstractHealthCheck,
    CheckOutcome,
    HealthCheck,
    HealthCheckResult,
    HealthStatus,
    health_check,
)
from sitehealth.config import HealthCheckerSettings
from sitehealth.database import DatabaseProtocol, SQLDatabase
from sitehealth.errors import (
    CacheBackendError,
    CheckFaultError,
    ConfigurationError,
    DiscoveryError,
    MissingCollaboratorError,
    NoChecksAvailableError,
    RunnerNotInitializedError,
    SiteHealthError,
)
from sitehealth.events import (
    BeforeReportDisplayEvent,
    CollectCategoriesEvent,
    CollectChecksEvent,
    CollectProvidersEvent,
    EventDispatcher,
    HealthCheckerEvents,
)
from sitehealth.providers import ProviderMetadata, ProviderRegistry
from sitehealth.report import Report
from sitehealth.runner import HealthCheckRunner

__version__ = "0.1.0"

__all__ = [
    "CORE_CATEGORIES",
    "AbstractHealthCheck",
    "BeforeReportDisplayEvent",
    "CacheBackendError",
    "CategoryRegistry",
    "CheckFaultError",
    "CheckOutcome",
    "CollectCategoriesEvent",
    "CollectChecksEvent",
    "CollectProvidersEvent",
    "ConfigurationError",
    "DatabaseProtocol",
    "DiscoveryError",
    "EventDispatcher",
    "HealthCategory",
    "HealthCheck",
    "HealthCheckResult",
    "HealthCheckRunner",
    "HealthCheckerEvents",
    "HealthCheckerSettings",
    "HealthStatus",
    "MemoryReportCache",
    "MissingCollaboratorError",
    "NoChecksAvailableError",
    "ProviderMetadata",
    "ProviderRegistry",
    "Report",
    "ReportCacheProtocol",
    "RunnerNotInitializedError",
    "SQLDatabase",
    "SiteHealthError",
    "health_check",
]
