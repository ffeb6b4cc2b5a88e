"""DTOs for the activity log (append-only change log)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ActivityLogEntryCreate:
    """Input for appending one activity log record."""

    tenant_id: str | None
    log_name: str
    description: str
    event: str
    subject_type: str | None
    subject_id: str | None
    causer_id: str | None
    properties: dict[str, Any]


@dataclass(frozen=True)
class ActivityLogResult:
    """Single activity log entry (read-model for list/get)."""

    id: str
    tenant_id: str | None
    log_name: str
    description: str
    event: str
    subject_type: str | None
    subject_id: str | None
    causer_id: str | None
    properties: dict[str, Any]
    created_at: datetime
