from .base import AbstractHealthCheck, FunctionalHealthCheck, HealthCheck, health_check
from .result import RESULT_KEYS, CheckOutcome, HealthCheckResult
from .status import HealthStatus

__all__ = [
    "RESULT_KEYS",
    "AbstractHealthCheck",
    "CheckOutcome",
    "FunctionalHealthCheck",
    "HealthCheck",
    "HealthCheckResult",
    "HealthStatus",
    "health_check",
]
