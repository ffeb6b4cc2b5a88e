"""Tests for ActivityLogService (filtered change-sets appended to the log)."""

import pytest

from panel_policy.application.services.activity_log_service import ActivityLogService
from panel_policy.application.services.audit_log_filter import AuditLogOptions
from panel_policy.domain.entities import Actor
from panel_policy.domain.exceptions import InvalidActionException, ValidationException

BEFORE = {"name": "Ann", "email": "ann@example.com", "password": "h1"}
AFTER = {"name": "Anna", "email": "anna@example.com", "password": "h2"}
ADMIN = Actor(id="admin", tenant_id="t1")


@pytest.fixture
def service(activity_repo, settings) -> ActivityLogService:
    return ActivityLogService(activity_repo, settings=settings)


class TestLogChanges:
    async def test_update_records_only_allowed_dirty_fields(self, service, activity_repo) -> None:
        entry = await service.log_changes(
            tenant_id="t1",
            causer=ADMIN,
            action="update",
            resource_type="user",
            subject_id=42,
            before=BEFORE,
            after=AFTER,
            allow_list=["name"],
        )
        assert entry is not None
        assert entry.log_name == "Model"
        assert entry.event == "updated"
        assert entry.description == "user updated"
        assert entry.subject_type == "user"
        assert entry.subject_id == "42"
        assert entry.causer_id == "admin"
        assert entry.properties == {"old": {"name": "Ann"}, "attributes": {"name": "Anna"}}
        assert activity_repo.entries == [entry]

    async def test_create_without_before(self, service) -> None:
        entry = await service.log_changes(
            tenant_id="t1",
            causer=None,
            action="create",
            resource_type="user",
            subject_id="u9",
            before=None,
            after={"name": "Bo"},
            allow_list=["name"],
        )
        assert entry is not None
        assert entry.causer_id is None
        assert entry.properties == {"old": {"name": None}, "attributes": {"name": "Bo"}}

    async def test_no_changes_is_a_no_op(self, service, activity_repo) -> None:
        entry = await service.log_changes(
            tenant_id="t1",
            causer=ADMIN,
            action="update",
            resource_type="user",
            subject_id=42,
            before=BEFORE,
            after=BEFORE,
            allow_list=["name"],
        )
        assert entry is None
        assert activity_repo.entries == []

    async def test_empty_change_set_submitted_when_configured(self, activity_repo, settings) -> None:
        settings = settings.model_copy(update={"activity_log_submit_empty": True})
        service = ActivityLogService(activity_repo, settings=settings)
        entry = await service.log_changes(
            tenant_id="t1",
            causer=ADMIN,
            action="update",
            resource_type="user",
            subject_id=42,
            before=BEFORE,
            after=BEFORE,
            allow_list=["name"],
        )
        assert entry is not None
        assert entry.properties == {"old": {}, "attributes": {}}

    async def test_options_override(self, service) -> None:
        entry = await service.log_changes(
            tenant_id="t1",
            causer=ADMIN,
            action="update",
            resource_type="user",
            subject_id=42,
            before=BEFORE,
            after={**BEFORE, "name": "Anna"},
            allow_list=["name", "email"],
            options=AuditLogOptions(only_dirty=False),
        )
        assert entry is not None
        assert list(entry.properties["attributes"]) == ["name", "email"]

    async def test_excluded_resource_skipped_on_resource_channel(self, service, activity_repo) -> None:
        entry = await service.log_changes(
            tenant_id="t1",
            causer=ADMIN,
            action="update",
            resource_type="user",
            subject_id=42,
            before=BEFORE,
            after=AFTER,
            allow_list=["name"],
            log_name="Resource",
        )
        assert entry is None
        assert activity_repo.entries == []

    async def test_other_resource_logged_on_resource_channel(self, service) -> None:
        entry = await service.log_changes(
            tenant_id="t1",
            causer=ADMIN,
            action="delete",
            resource_type="role",
            subject_id="r1",
            before={"code": "editor"},
            after=None,
            allow_list=["code"],
            log_name="Resource",
        )
        assert entry is not None
        assert entry.event == "deleted"
        assert entry.log_name == "Resource"

    async def test_disabled_logging_is_a_no_op(self, activity_repo, settings) -> None:
        settings = settings.model_copy(update={"activity_log_enabled": False})
        service = ActivityLogService(activity_repo, settings=settings)
        entry = await service.log_changes(
            tenant_id="t1",
            causer=ADMIN,
            action="update",
            resource_type="user",
            subject_id=42,
            before=BEFORE,
            after=AFTER,
            allow_list=["name"],
        )
        assert entry is None

    async def test_non_mutating_action_rejected(self, service) -> None:
        with pytest.raises(InvalidActionException):
            await service.log_changes(
                tenant_id="t1",
                causer=ADMIN,
                action="viewAny",
                resource_type="user",
                subject_id=None,
                before=None,
                after=None,
                allow_list=["name"],
            )


class TestChannels:
    def test_channel_enabled(self, service) -> None:
        assert service.channel_enabled("Model", "user")
        assert service.channel_enabled("Resource", "role")
        assert not service.channel_enabled("Resource", "user")

    def test_channel_not_configured(self, activity_repo, settings) -> None:
        settings = settings.model_copy(update={"activity_log_channels": ["Model"]})
        service = ActivityLogService(activity_repo, settings=settings)
        assert not service.channel_enabled("Access")

    def test_default_options_from_settings(self, service) -> None:
        assert service.default_options() == AuditLogOptions(only_dirty=True, suppress_empty=True)

    def test_safe_allow_list_drops_sensitive_fields(self, service) -> None:
        allow = service.safe_allow_list(["name", "password", "remember_token", "email"])
        assert list(allow) == ["name", "email"]


class TestAccessLog:
    async def test_login(self, service) -> None:
        entry = await service.log_access(
            tenant_id="t1", causer=ADMIN, event="login", properties={"ip": "10.0.0.1"}
        )
        assert entry is not None
        assert entry.log_name == "Access"
        assert entry.event == "login"
        assert entry.subject_type is None
        assert entry.properties == {"ip": "10.0.0.1"}

    @pytest.mark.parametrize("event", ["updated", "signin"])
    async def test_non_access_event_rejected(self, service, event: str) -> None:
        with pytest.raises(ValidationException):
            await service.log_access(tenant_id="t1", causer=ADMIN, event=event)


class TestListActivity:
    async def test_newest_first_for_tenant(self, service) -> None:
        for name in ("A", "B"):
            await service.log_changes(
                tenant_id="t1",
                causer=ADMIN,
                action="create",
                resource_type="role",
                subject_id=name,
                before=None,
                after={"code": name},
                allow_list=["code"],
            )
        rows = await service.list_activity("t1", subject_type="role")
        assert [r.subject_id for r in rows] == ["B", "A"]
        assert await service.list_activity("t2") == []

    async def test_filters_passed_to_repository(self, service, activity_repo) -> None:
        await service.list_activity("t1", skip=5, limit=10, causer_id="admin")
        assert activity_repo.last_filters["skip"] == 5
        assert activity_repo.last_filters["limit"] == 10
        assert activity_repo.last_filters["causer_id"] == "admin"

    @pytest.mark.parametrize("skip,limit", [(-1, 10), (0, 0)])
    async def test_bad_paging_rejected(self, service, skip: int, limit: int) -> None:
        with pytest.raises(ValidationException):
            await service.list_activity("t1", skip=skip, limit=limit)
