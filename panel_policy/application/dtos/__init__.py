"""Application DTOs (no dependency on ORM)."""

from panel_policy.application.dtos.activity_log import (
    ActivityLogEntryCreate,
    ActivityLogResult,
)

__all__ = ["ActivityLogEntryCreate", "ActivityLogResult"]
