"""Authorization gate: per-resource-type policy decisions.

One gate per resource type, the way an admin panel defines one policy per
model. The gate is a pure function of (actor, action, resource): it keeps no
state and reads no ambient request context, so it is safe to share between
threads and tasks.
"""

from __future__ import annotations

import logging

from panel_policy.application.services.permission_catalog import permission_name
from panel_policy.domain.entities import Actor, Decision, Resource
from panel_policy.domain.enums import Action, DecisionReason
from panel_policy.domain.exceptions import InvalidInvocationException
from panel_policy.domain.value_objects import ResourceType

logger = logging.getLogger(__name__)


class AuthorizationGate:
    """Decides whether an actor may perform an action on a resource type.

    Collection-level actions (view_any, create, delete_any, restore_any,
    force_delete_any) take no resource and reduce to a permission check.
    Instance-level actions require a resource; destructive ones (delete,
    force_delete) are always denied on the actor's own resource, whatever
    the actor's permissions.
    """

    def __init__(self, resource_type: str | ResourceType) -> None:
        if not isinstance(resource_type, ResourceType):
            resource_type = ResourceType(resource_type)
        self.resource_type = resource_type

    def __repr__(self) -> str:
        return f"AuthorizationGate({self.resource_type.value!r})"

    def permission_for(self, action: str | Action) -> str:
        """Permission name required for action on this resource type."""
        return permission_name(Action.parse(action), self.resource_type)

    def decide(
        self,
        actor: Actor,
        action: str | Action,
        resource: Resource | None = None,
    ) -> Decision:
        """Return the Decision for actor performing action (on resource).

        Args:
            actor: Who is acting (id, permission set, optional tenant).
            action: Action or action tag ('delete', 'forceDelete', ...).
            resource: Target record; required for instance-level actions,
                forbidden for collection-level ones.

        Returns:
            Decision with granted flag, reason and the permission checked.

        Raises:
            InvalidActionException: If action is not a known tag.
            InvalidInvocationException: If resource presence does not match
                the action's scope.
        """
        act = Action.parse(action)
        permission = permission_name(act, self.resource_type)

        if act.requires_resource and resource is None:
            raise InvalidInvocationException(
                f"Action '{act.value}' on {self.resource_type} requires a resource",
                action=act.value,
            )
        if not act.requires_resource and resource is not None:
            raise InvalidInvocationException(
                f"Action '{act.value}' on {self.resource_type} is collection-wide "
                "and takes no resource",
                action=act.value,
            )

        if resource is not None:
            if act.is_destructive and resource.is_owned_by(actor):
                return self._log(
                    actor, act, Decision.deny(permission, DecisionReason.SELF_ACTION_BLOCKED)
                )
            if (
                actor.tenant_id is not None
                and resource.tenant_id is not None
                and actor.tenant_id != resource.tenant_id
            ):
                return self._log(
                    actor, act, Decision.deny(permission, DecisionReason.TENANT_MISMATCH)
                )

        if actor.has_permission(permission):
            return self._log(actor, act, Decision.allow(permission))
        return self._log(
            actor, act, Decision.deny(permission, DecisionReason.PERMISSION_MISSING)
        )

    def allows(
        self,
        actor: Actor,
        action: str | Action,
        resource: Resource | None = None,
    ) -> bool:
        """Shorthand for decide(...).granted."""
        return self.decide(actor, action, resource).granted

    def _log(self, actor: Actor, action: Action, decision: Decision) -> Decision:
        logger.debug(
            "Policy %s %s: actor=%s reason=%s",
            self.resource_type,
            action.value,
            actor.id,
            decision.reason.value,
        )
        return decision
