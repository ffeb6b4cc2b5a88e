"""DB-backed permission lookup (implements IPermissionResolver).

A user's permissions are the union of the permissions of every role
assigned to them in the tenant, ignoring inactive roles and expired
assignments.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from panel_policy.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)
from panel_policy.infrastructure.persistence.models.role import Role


def _live_assignments(stmt: Select[Any], user_id: str, tenant_id: str) -> Select[Any]:
    """Restrict stmt (already joined to Role) to the user's live role assignments."""
    return stmt.where(
        UserRole.user_id == user_id,
        UserRole.tenant_id == tenant_id,
        Role.is_active.is_(True),
        or_(UserRole.expires_at.is_(None), UserRole.expires_at > func.now()),
    )


class PermissionResolver:
    """Reads role assignments and role permissions for one session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_user_permissions(self, user_id: str, tenant_id: str) -> set[str]:
        """Return permission names (e.g. delete_user) granted to user in tenant."""
        stmt = (
            select(Permission.name)
            .select_from(UserRole)
            .join(Role, Role.id == UserRole.role_id)
            .join(RolePermission, RolePermission.role_id == Role.id)
            .join(Permission, Permission.id == RolePermission.permission_id)
        )
        result = await self.db.execute(_live_assignments(stmt, user_id, tenant_id))
        return set(result.scalars().all())

    async def get_user_role_codes(self, user_id: str, tenant_id: str) -> set[str]:
        """Return codes of the user's live roles in tenant (e.g. super_admin)."""
        stmt = select(Role.code).select_from(UserRole).join(Role, Role.id == UserRole.role_id)
        result = await self.db.execute(_live_assignments(stmt, user_id, tenant_id))
        return set(result.scalars().all())
