"""Persistence models: ORM entities and mixins."""

from panel_policy.infrastructure.persistence.models.activity_log import ActivityLog
from panel_policy.infrastructure.persistence.models.mixins import (
    CuidPrimaryKey,
    TenantScoped,
    TenantScopedModel,
    Timestamped,
)
from panel_policy.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)
from panel_policy.infrastructure.persistence.models.role import Role

__all__ = [
    "ActivityLog",
    "CuidPrimaryKey",
    "Permission",
    "Role",
    "RolePermission",
    "TenantScoped",
    "TenantScopedModel",
    "Timestamped",
    "UserRole",
]
