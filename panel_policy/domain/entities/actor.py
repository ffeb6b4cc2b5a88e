"""Actor and resource snapshots passed explicitly to the authorization gate.

Both are immutable for the duration of one decision; nothing here reads
ambient request state.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from panel_policy.domain.exceptions import ValidationException

Identifier = str | int


@dataclass(frozen=True)
class Actor:
    """The identity performing an action.

    Attributes:
        id: Unique identifier of the authenticated user.
        permissions: Permission names granted to the actor (e.g. delete_user).
        tenant_id: Tenant the actor is acting in, if the panel is multi-tenant.
    """

    id: Identifier
    permissions: frozenset[str] = field(default_factory=frozenset)
    tenant_id: Identifier | None = None

    def __post_init__(self) -> None:
        if self.id is None or self.id == "":
            raise ValidationException("Actor ID is required", field="id")
        if not isinstance(self.permissions, frozenset):
            object.__setattr__(self, "permissions", frozenset(self.permissions))

    @classmethod
    def with_permissions(
        cls,
        actor_id: Identifier,
        permissions: Iterable[str],
        tenant_id: Identifier | None = None,
    ) -> "Actor":
        """Build an actor from any iterable of permission names."""
        return cls(id=actor_id, permissions=frozenset(permissions), tenant_id=tenant_id)

    def has_permission(self, permission: str) -> bool:
        """Return True if the permission name was granted."""
        return permission in self.permissions


@dataclass(frozen=True)
class Resource:
    """Target entity instance of an instance-level action.

    For a user record, owner_id is the user's own id.
    """

    id: Identifier
    owner_id: Identifier | None
    tenant_id: Identifier | None = None

    def __post_init__(self) -> None:
        if self.id is None or self.id == "":
            raise ValidationException("Resource ID is required", field="id")

    @classmethod
    def self_owned(cls, resource_id: Identifier, tenant_id: Identifier | None = None) -> "Resource":
        """Resource that owns itself (e.g. a user record)."""
        return cls(id=resource_id, owner_id=resource_id, tenant_id=tenant_id)

    def is_owned_by(self, actor: Actor) -> bool:
        """Return True when the actor owns this resource."""
        return self.owner_id is not None and self.owner_id == actor.id
