"""Tests for check results and outcomes."""

import pytest
from pydantic import ValidationError

from sitehealth.checks import RESULT_KEYS, CheckOutcome, HealthCheckResult, HealthStatus


def make_result(**overrides):
    values = {
        "health_status": HealthStatus.WARNING,
        "title": "Disk Space",
        "description": "Disk space is running low: 400 MB free.",
        "slug": "system.disk_space",
        "category": "system",
        "provider": "core",
    }
    values.update(overrides)
    return HealthCheckResult(**values)


class TestHealthCheckResult:
    """Test the immutable result record."""

    def test_to_dict_has_exactly_the_transport_keys(self):
        data = make_result().to_dict()

        assert set(data) == set(RESULT_KEYS)
        assert data["status"] == "warning"
        assert data["slug"] == "system.disk_space"
        assert data["category"] == "system"
        assert data["provider"] == "core"

    def test_to_array_alias(self):
        result = make_result()
        assert result.to_array() == result.to_dict()

    def test_is_frozen(self):
        result = make_result()
        with pytest.raises(ValidationError):
            result.description = "changed"  # type: ignore[misc]

    def test_status_property(self):
        assert make_result().status is HealthStatus.WARNING

    def test_empty_slug_rejected(self):
        with pytest.raises(ValidationError):
            make_result(slug="")

    def test_provider_defaults_to_core(self):
        values = {
            "health_status": HealthStatus.GOOD,
            "title": "t",
            "description": "d",
            "slug": "x.y",
            "category": "system",
        }
        assert HealthCheckResult(**values).provider == "core"

    def test_from_dict_restores_result(self):
        result = make_result()
        assert HealthCheckResult.from_dict(result.to_dict()) == result

    def test_from_dict_rejects_unknown_status(self):
        data = make_result().to_dict()
        data["status"] = "unknown"
        with pytest.raises(ValueError):
            HealthCheckResult.from_dict(data)


class TestCheckOutcome:
    """Test the success/fault result type."""

    def test_success(self):
        outcome = CheckOutcome.success(make_result())
        assert outcome.ok
        assert outcome.fault is None

    def test_failure_from_exception(self):
        outcome = CheckOutcome.failure(RuntimeError("Connection refused"))
        assert not outcome.ok
        assert outcome.result is None
        assert outcome.fault == "Connection refused"
        assert outcome.fault_type == "RuntimeError"

    def test_failure_from_message(self):
        outcome = CheckOutcome.failure("no database")
        assert outcome.fault == "no database"
        assert outcome.fault_type is None
