"""Tenant RBAC seeding: permission catalog, default roles and role assignment.

Seeding is idempotent (first-or-create): re-running after registering a new
resource type adds only the missing permissions and grants them to the
super admin role.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from panel_policy.application.services.permission_catalog import (
    PermissionCatalog,
    RoleDefinition,
)
from panel_policy.domain.exceptions import ResourceNotFoundException
from panel_policy.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)
from panel_policy.infrastructure.persistence.models.role import Role
from panel_policy.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)


class RbacInitializationService:
    """Seeds permissions and roles for a tenant from a PermissionCatalog."""

    def __init__(self, db: AsyncSession, catalog: PermissionCatalog) -> None:
        self.db = db
        self.catalog = catalog

    async def initialize_tenant(self, tenant_id: str) -> dict[str, str]:
        """Create missing permissions, roles and role-permissions.

        Returns:
            Role code -> role id for the catalog's default roles.
        """
        permission_map = await self._ensure_permissions(tenant_id)
        role_map: dict[str, str] = {}
        for role_def in self.catalog.default_roles():
            role_id = await self._ensure_role(tenant_id, role_def)
            await self._ensure_role_permissions(tenant_id, role_id, role_def, permission_map)
            role_map[role_def.code] = role_id
        await self.db.flush()
        logger.info(
            "Seeded RBAC for tenant %s (%d permissions, %d roles)",
            tenant_id,
            len(permission_map),
            len(role_map),
        )
        return role_map

    async def assign_role(
        self,
        tenant_id: str,
        user_id: str,
        role_code: str,
        assigned_by: str | None = None,
        expires_at: datetime | None = None,
    ) -> None:
        """Assign role_code to user; no-op when a live assignment exists.

        An expired assignment is renewed in place (new expiry, assigner and
        assignment time) so the role takes effect again.

        Raises:
            ResourceNotFoundException: If the role does not exist in the tenant.
        """
        result = await self.db.execute(
            select(Role.id).where(Role.tenant_id == tenant_id, Role.code == role_code)
        )
        role_id = result.scalar_one_or_none()
        if role_id is None:
            raise ResourceNotFoundException("role", f"{role_code}:{tenant_id}")
        existing = await self.db.execute(
            select(UserRole).where(UserRole.user_id == user_id, UserRole.role_id == role_id)
        )
        assignment = existing.scalar_one_or_none()
        if assignment is not None:
            now = datetime.now(timezone.utc)
            if assignment.expires_at is None or assignment.expires_at > now:
                return
            assignment.expires_at = expires_at
            assignment.assigned_by = assigned_by
            assignment.assigned_at = now
            await self.db.flush()
            logger.info(
                "Renewed expired role %s for user %s in tenant %s", role_code, user_id, tenant_id
            )
            return
        self.db.add(
            UserRole(
                id=generate_cuid(),
                tenant_id=tenant_id,
                user_id=user_id,
                role_id=role_id,
                assigned_by=assigned_by,
                expires_at=expires_at,
            )
        )
        await self.db.flush()

    async def _ensure_permissions(self, tenant_id: str) -> dict[str, str]:
        result = await self.db.execute(
            select(Permission.name, Permission.id).where(Permission.tenant_id == tenant_id)
        )
        permission_map: dict[str, str] = {name: pid for name, pid in result.all()}
        missing = [p for p in self.catalog.permissions() if p not in permission_map]
        for name in missing:
            described = self.catalog.describe(name)
            if described is None:
                continue
            resource_type, action = described
            perm_id = generate_cuid()
            self.db.add(
                Permission(
                    id=perm_id,
                    tenant_id=tenant_id,
                    name=name,
                    resource_type=resource_type,
                    action=action,
                    description=f"{action.replace('_', ' ').capitalize()} {resource_type}",
                )
            )
            permission_map[name] = perm_id
        if missing:
            await self.db.flush()
        return permission_map

    async def _ensure_role(self, tenant_id: str, role_def: RoleDefinition) -> str:
        result = await self.db.execute(
            select(Role.id).where(Role.tenant_id == tenant_id, Role.code == role_def.code)
        )
        role_id = result.scalar_one_or_none()
        if role_id is not None:
            return role_id
        role_id = generate_cuid()
        self.db.add(
            Role(
                id=role_id,
                tenant_id=tenant_id,
                code=role_def.code,
                name=role_def.name,
                description=role_def.description,
                is_system=role_def.is_system,
                is_active=True,
            )
        )
        await self.db.flush()
        return role_id

    async def _ensure_role_permissions(
        self,
        tenant_id: str,
        role_id: str,
        role_def: RoleDefinition,
        permission_map: dict[str, str],
    ) -> None:
        result = await self.db.execute(
            select(RolePermission.permission_id).where(RolePermission.role_id == role_id)
        )
        granted = set(result.scalars().all())
        for name in role_def.permissions:
            perm_id = permission_map.get(name)
            if perm_id is None or perm_id in granted:
                continue
            self.db.add(
                RolePermission(
                    id=generate_cuid(),
                    tenant_id=tenant_id,
                    role_id=role_id,
                    permission_id=perm_id,
                )
            )
            granted.add(perm_id)
