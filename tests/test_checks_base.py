"""Tests for the check contract and the guarded base class."""

import pytest

from sitehealth.checks import (
    AbstractHealthCheck,
    FunctionalHealthCheck,
    HealthCheck,
    HealthCheckResult,
    HealthStatus,
    health_check,
)
from sitehealth.errors import MissingCollaboratorError
from sitehealth.i18n import Translator
from tests.utils import MockDatabase, RaisingCheck, StaticCheck


class NeedsDatabaseCheck(AbstractHealthCheck):
    slug = "database.needs"
    category = "database"

    async def perform_check(self) -> HealthCheckResult:
        await self.require_database().execute("SELECT 1")
        return self.good("fine")


class TestAbstractHealthCheck:
    """Test identity accessors and result helpers."""

    def test_satisfies_protocol(self):
        assert isinstance(StaticCheck("core.example"), HealthCheck)

    def test_identity_accessors(self):
        check = StaticCheck("core.example", category="security", provider="core")
        assert check.get_slug() == "core.example"
        assert check.get_category() == "security"
        assert check.get_provider() == "core"

    def test_title_falls_back_to_slug(self):
        assert StaticCheck("core.untitled").get_title() == "core.untitled"

    def test_title_from_translator(self):
        translator = Translator({"COM_HEALTHCHECKER_CHECK_CORE_EXAMPLE_TITLE": "Example"})
        check = StaticCheck("core.example", translator=translator)
        assert check.title == "Example"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", list(HealthStatus))
    async def test_helpers_fill_identity(self, status):
        check = StaticCheck("core.example", status=status, category="users")
        result = await check.run()

        assert result.health_status is status
        assert result.slug == check.get_slug()
        assert result.category == check.get_category()
        assert result.provider == check.get_provider()
        assert result.title == check.get_title()

    @pytest.mark.asyncio
    async def test_run_is_deterministic(self):
        check = StaticCheck("core.example", status=HealthStatus.WARNING)
        first = await check.run()
        second = await check.run()
        assert first.health_status == second.health_status
        assert first.description == second.description


class TestFaultIsolation:
    """``run()`` never raises."""

    @pytest.mark.asyncio
    async def test_exception_becomes_warning(self):
        check = RaisingCheck("core.broken", message="disk exploded", category="system")
        result = await check.run()

        assert result.health_status is HealthStatus.WARNING
        assert "disk exploded" in result.description
        assert result.slug == "core.broken"
        assert result.category == "system"
        assert result.provider == "core"

    @pytest.mark.asyncio
    async def test_execute_returns_fault_outcome(self):
        outcome = await RaisingCheck("core.broken", message="nope").execute()
        assert not outcome.ok
        assert outcome.fault == "nope"
        assert outcome.fault_type == "RuntimeError"

    @pytest.mark.asyncio
    async def test_missing_database_degrades_to_warning(self):
        result = await NeedsDatabaseCheck().run()
        assert result.health_status is HealthStatus.WARNING
        assert "requires database access" in result.description

    def test_require_database_raises_named_error(self):
        with pytest.raises(MissingCollaboratorError) as exc_info:
            NeedsDatabaseCheck().require_database()
        assert exc_info.value.slug == "database.needs"
        assert exc_info.value.collaborator == "database"


class TestCollaborators:
    """Test constructor and copy-based injection."""

    @pytest.mark.asyncio
    async def test_constructor_injection(self):
        db = MockDatabase()
        result = await NeedsDatabaseCheck(database=db).run()
        assert result.health_status is HealthStatus.GOOD
        assert db.queries == ["SELECT 1"]

    def test_with_database_returns_copy(self):
        original = NeedsDatabaseCheck()
        db = MockDatabase()
        injected = original.with_database(db)

        assert injected is not original
        assert injected.database is db
        assert original.database is None


class TestFunctionalHealthCheck:
    """Test decorator-built checks."""

    @pytest.mark.asyncio
    async def test_decorator(self):
        @health_check("core.decorated", "content")
        async def decorated(check: AbstractHealthCheck) -> HealthCheckResult:
            return check.critical("bad")

        assert isinstance(decorated, FunctionalHealthCheck)
        result = await decorated.run()
        assert result.health_status is HealthStatus.CRITICAL
        assert result.slug == "core.decorated"
        assert result.category == "content"

    @pytest.mark.asyncio
    async def test_decorated_fault_is_isolated(self):
        @health_check("core.failing", "content")
        async def failing(check: AbstractHealthCheck) -> HealthCheckResult:
            raise ValueError("bad value")

        result = await failing.run()
        assert result.health_status is HealthStatus.WARNING
        assert "bad value" in result.description
