"""Repository interfaces (ports) for the application layer."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from panel_policy.application.dtos.activity_log import (
    ActivityLogEntryCreate,
    ActivityLogResult,
)


class IActivityLogRepository(Protocol):
    """Append-only activity log store."""

    async def create(self, entry: ActivityLogEntryCreate) -> ActivityLogResult:
        """Append one entry; return the stored record."""

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
        """List entries for a tenant, newest first."""
