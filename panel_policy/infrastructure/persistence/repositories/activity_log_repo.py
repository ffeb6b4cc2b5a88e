"""Activity log repository. Append-only; implements IActivityLogRepository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from panel_policy.application.dtos.activity_log import (
    ActivityLogEntryCreate,
    ActivityLogResult,
)
from panel_policy.infrastructure.persistence.models.activity_log import ActivityLog
from panel_policy.shared.utils.generators import generate_cuid


def _orm_to_result(row: ActivityLog) -> ActivityLogResult:
    """Map ORM to application DTO."""
    return ActivityLogResult(
        id=row.id,
        tenant_id=row.tenant_id,
        log_name=row.log_name,
        description=row.description,
        event=row.event,
        subject_type=row.subject_type,
        subject_id=row.subject_id,
        causer_id=row.causer_id,
        properties=row.properties or {},
        created_at=row.created_at,
    )


class ActivityLogRepository:
    """Append-only activity log repository. No update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, entry: ActivityLogEntryCreate) -> ActivityLogResult:
        """Append one activity log entry; return created record."""
        row = ActivityLog(
            id=generate_cuid(),
            tenant_id=entry.tenant_id,
            log_name=entry.log_name,
            description=entry.description,
            event=entry.event,
            subject_type=entry.subject_type,
            subject_id=entry.subject_id,
            causer_id=entry.causer_id,
            properties=entry.properties,
        )
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return _orm_to_result(row)

    async def list(
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
        """List activity log entries for tenant with optional filters (newest first)."""
        conditions = [ActivityLog.tenant_id == tenant_id]
        if log_name is not None:
            conditions.append(ActivityLog.log_name == log_name)
        if subject_type is not None:
            conditions.append(ActivityLog.subject_type == subject_type)
        if subject_id is not None:
            conditions.append(ActivityLog.subject_id == subject_id)
        if causer_id is not None:
            conditions.append(ActivityLog.causer_id == causer_id)
        if from_timestamp is not None:
            conditions.append(ActivityLog.created_at >= from_timestamp)
        if to_timestamp is not None:
            conditions.append(ActivityLog.created_at <= to_timestamp)

        stmt = (
            select(ActivityLog)
            .where(and_(*conditions))
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [_orm_to_result(r) for r in result.scalars().all()]
