"""SQLAlchemy repositories implementing application ports."""

from panel_policy.infrastructure.persistence.repositories.activity_log_repo import (
    ActivityLogRepository,
)

__all__ = ["ActivityLogRepository"]
