"""Activity log service: filter a mutation's change-set and append it to the log.

Call after the mutation has been authorized and committed. Records go
through AuditLogFilter first, so only allow-listed fields are persisted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from panel_policy.application.dtos.activity_log import (
    ActivityLogEntryCreate,
    ActivityLogResult,
)
from panel_policy.application.interfaces.repositories import IActivityLogRepository
from panel_policy.application.services.audit_log_filter import (
    AuditLogFilter,
    AuditLogOptions,
)
from panel_policy.core.config import Settings, get_settings
from panel_policy.core.constants import (
    LOG_NAME_ACCESS,
    LOG_NAME_MODEL,
    LOG_NAME_RESOURCE,
)
from panel_policy.domain.entities import Actor, Identifier
from panel_policy.domain.enums import Action, ActivityEvent
from panel_policy.domain.exceptions import ValidationException
from panel_policy.domain.value_objects import AllowList, ResourceType

logger = logging.getLogger(__name__)

_ACCESS_EVENTS = frozenset({ActivityEvent.LOGIN, ActivityEvent.LOGOUT})


def _str_or_none(value: Identifier | None) -> str | None:
    return None if value is None else str(value)


class ActivityLogService:
    """Writes filtered change-sets to the activity log repository.

    Channel switches and the excluded resource types come from Settings;
    a disabled channel or an empty change-set is a silent no-op (None).
    """

    def __init__(
        self,
        repository: IActivityLogRepository,
        settings: Settings | None = None,
    ) -> None:
        self._repo = repository
        self.settings = settings or get_settings()

    def default_options(self) -> AuditLogOptions:
        """Filter options derived from settings."""
        return AuditLogOptions(
            only_dirty=self.settings.activity_log_only_dirty,
            suppress_empty=not self.settings.activity_log_submit_empty,
        )

    def safe_allow_list(self, fields: AllowList | Iterable[str]) -> AllowList:
        """Return fields minus the configured sensitive field names."""
        return AllowList.of(fields).without(self.settings.activity_log_sensitive_fields)

    def channel_enabled(self, log_name: str, resource_type: str | None = None) -> bool:
        """Return True when entries for this channel (and resource type) are recorded."""
        if not self.settings.activity_log_enabled:
            return False
        if log_name not in self.settings.activity_log_channels:
            return False
        if (
            log_name == LOG_NAME_RESOURCE
            and resource_type is not None
            and resource_type in self.settings.activity_log_excluded_resources
        ):
            return False
        return True

    async def log_changes(
        self,
        *,
        tenant_id: Identifier | None,
        causer: Actor | None,
        action: str | Action,
        resource_type: str,
        subject_id: Identifier | None,
        before: Mapping[str, Any] | None,
        after: Mapping[str, Any] | None,
        allow_list: AllowList | Iterable[str],
        log_name: str = LOG_NAME_MODEL,
        options: AuditLogOptions | None = None,
    ) -> ActivityLogResult | None:
        """Filter before/after against the allow-list and append one entry.

        Args:
            tenant_id: Tenant the subject belongs to.
            causer: Actor that performed the mutation (None for system jobs).
            action: Mutating policy action (create, update, delete, ...).
            resource_type: Subject resource type (e.g. 'user').
            subject_id: Subject record id.
            before: Snapshot before the mutation (None on create).
            after: Snapshot after the mutation (None on delete).
            allow_list: Field names eligible for logging.
            log_name: Channel (Model or Resource).
            options: Overrides for the settings-derived filter options.

        Returns:
            The stored entry, or None when the channel is disabled or the
            change-set is empty and empty logs are not submitted.

        Raises:
            InvalidActionException: If action is unknown or not a mutation.
        """
        event = ActivityEvent.for_action(Action.parse(action))
        rtype = ResourceType(resource_type).value
        if not self.channel_enabled(log_name, rtype):
            logger.debug("Activity log channel %s disabled for %s", log_name, rtype)
            return None

        change_set = AuditLogFilter.filter(
            before, after, allow_list, options or self.default_options()
        )
        if change_set is None:
            logger.debug(
                "Activity log skipped (no changes): %s %s %s", rtype, subject_id, event.value
            )
            return None

        entry = ActivityLogEntryCreate(
            tenant_id=_str_or_none(tenant_id),
            log_name=log_name,
            description=f"{rtype} {event.value}",
            event=event.value,
            subject_type=rtype,
            subject_id=_str_or_none(subject_id),
            causer_id=_str_or_none(causer.id) if causer else None,
            properties=change_set.to_properties(),
        )
        return await self._repo.create(entry)

    async def log_access(
        self,
        *,
        tenant_id: Identifier | None,
        causer: Actor,
        event: str | ActivityEvent,
        properties: Mapping[str, Any] | None = None,
    ) -> ActivityLogResult | None:
        """Append a login/logout entry on the Access channel."""
        try:
            access_event = ActivityEvent(event)
        except ValueError:
            access_event = None
        if access_event not in _ACCESS_EVENTS:
            raise ValidationException(
                f"Access log event must be login or logout, got {event!r}",
                field="event",
            )
        if not self.channel_enabled(LOG_NAME_ACCESS):
            return None
        entry = ActivityLogEntryCreate(
            tenant_id=_str_or_none(tenant_id),
            log_name=LOG_NAME_ACCESS,
            description=access_event.value,
            event=access_event.value,
            subject_type=None,
            subject_id=None,
            causer_id=str(causer.id),
            properties=dict(properties or {}),
        )
        return await self._repo.create(entry)

    async def list_activity(
        self,
        tenant_id: str,
        *,
        skip: int = 0,
        limit: int = 100,
        log_name: str | None = None,
        subject_type: str | None = None,
        subject_id: str | None = None,
        causer_id: str | None = None,
        from_timestamp: datetime | None = None,
        to_timestamp: datetime | None = None,
    ) -> list[ActivityLogResult]:
        """List a tenant's activity, newest first."""
        if limit <= 0 or skip < 0:
            raise ValidationException("skip must be >= 0 and limit > 0", field="limit")
        return await self._repo.list(
            tenant_id,
            skip=skip,
            limit=limit,
            log_name=log_name,
            subject_type=subject_type,
            subject_id=subject_id,
            causer_id=causer_id,
            from_timestamp=from_timestamp,
            to_timestamp=to_timestamp,
        )
