"""Permission catalog: conventional permission names per resource type.

A permission name is '<action>_<resource_type>' (view_any_user,
force_delete_blog_post). The catalog for a resource type lists one name per
policy action; the super admin role holds every name in the catalog.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from panel_policy.core.constants import PERMISSION_SEP, SUPER_ADMIN_ROLE
from panel_policy.domain.enums import Action
from panel_policy.domain.exceptions import ValidationException
from panel_policy.domain.value_objects import ResourceType


def permission_name(action: Action, resource_type: str | ResourceType) -> str:
    """Return the permission name for action on resource_type."""
    rtype = resource_type if isinstance(resource_type, ResourceType) else ResourceType(resource_type)
    return f"{action.value}{PERMISSION_SEP}{rtype.value}"


def permissions_for(
    resource_type: str | ResourceType,
    actions: Iterable[Action] | None = None,
) -> list[str]:
    """Return permission names for resource_type, in Action declaration order.

    Args:
        resource_type: e.g. 'user'.
        actions: Subset of actions; defaults to every Action.
    """
    selected = list(Action) if actions is None else [Action.parse(a) for a in actions]
    return [permission_name(a, resource_type) for a in selected]


@dataclass(frozen=True)
class RoleDefinition:
    """Role code, display name and the permission names it grants."""

    code: str
    name: str
    description: str
    permissions: tuple[str, ...]
    is_system: bool = True


@dataclass
class PermissionCatalog:
    """Permission names for a set of resource types plus the default roles."""

    resource_types: list[str] = field(default_factory=list)
    super_admin_role: str = SUPER_ADMIN_ROLE

    def __post_init__(self) -> None:
        requested = self.resource_types
        self.resource_types = []
        for rtype in requested:
            self.add_resource_type(rtype)

    def add_resource_type(self, resource_type: str) -> None:
        """Register a resource type; no-op when already present.

        Raises:
            ValidationException: If its permission names clash with those of
                a registered type (e.g. 'user' and 'any_user' both yield
                view_any_user).
        """
        value = ResourceType(resource_type).value
        if value in self.resource_types:
            return
        clashes = sorted(set(permissions_for(value)) & set(self.permissions()))
        if clashes:
            raise ValidationException(
                f"Resource type '{value}' produces permission names already in the "
                f"catalog: {', '.join(clashes)}",
                field="resource_types",
            )
        self.resource_types.append(value)

    def permissions(self) -> list[str]:
        """All permission names, grouped by resource type."""
        names: list[str] = []
        for rtype in self.resource_types:
            names.extend(permissions_for(rtype))
        return names

    def describe(self, permission: str) -> tuple[str, str] | None:
        """Split a catalog permission name into (resource_type, action).

        Returns None when the name is not in the catalog.
        """
        for rtype in self.resource_types:
            suffix = f"{PERMISSION_SEP}{rtype}"
            if not permission.endswith(suffix):
                continue
            prefix = permission[: -len(suffix)]
            if prefix in Action.values():
                return rtype, prefix
        return None

    def default_roles(self) -> list[RoleDefinition]:
        """Default roles seeded for a tenant: the super admin holds everything."""
        return [
            RoleDefinition(
                code=self.super_admin_role,
                name="Super Admin",
                description="Full panel access with all permissions",
                permissions=tuple(self.permissions()),
            )
        ]
