"""Application ports (Protocols) implemented by infrastructure adapters."""

from panel_policy.application.interfaces.repositories import IActivityLogRepository
from panel_policy.application.interfaces.services import (
    ICacheService,
    IPermissionResolver,
)

__all__ = ["IActivityLogRepository", "ICacheService", "IPermissionResolver"]
