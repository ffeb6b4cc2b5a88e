"""Infrastructure services: DB-backed permission resolution and RBAC seeding."""

from panel_policy.infrastructure.services.permission_resolver import PermissionResolver
from panel_policy.infrastructure.services.rbac_initialization_service import (
    RbacInitializationService,
)

__all__ = ["PermissionResolver", "RbacInitializationService"]
