"""Authorization service: resolves actor permissions (with optional cache) and asks the gate."""

from __future__ import annotations

import logging

from panel_policy.application.interfaces.services import ICacheService, IPermissionResolver
from panel_policy.application.services.authorization_gate import AuthorizationGate
from panel_policy.domain.entities import Actor, Decision, Resource
from panel_policy.domain.enums import Action
from panel_policy.domain.exceptions import AuthorizationException
from panel_policy.infrastructure.cache.keys import (
    permission_key,
    tenant_permission_pattern,
)

logger = logging.getLogger(__name__)


class AuthorizationService:
    """Centralized permission checking; uses cache when available (5 min TTL typical).

    The permission lookup is the only I/O. Decisions themselves come from
    the pure AuthorizationGate for the requested resource type.
    """

    def __init__(
        self,
        permission_resolver: IPermissionResolver,
        cache: ICacheService | None = None,
        cache_ttl: int = 300,
    ) -> None:
        self.permission_resolver = permission_resolver
        self.cache = cache
        self.cache_ttl = cache_ttl
        self._gates: dict[str, AuthorizationGate] = {}

    def gate(self, resource_type: str) -> AuthorizationGate:
        """Return the (shared, stateless) gate for resource_type."""
        gate = self._gates.get(resource_type)
        if gate is None:
            gate = AuthorizationGate(resource_type)
            self._gates[resource_type] = gate
        return gate

    def _cache_key(self, user_id: str, tenant_id: str) -> str | None:
        """Permission cache key, or None when the cache is off or the ids cannot form a key."""
        if not (self.cache and self.cache.is_available()):
            return None
        try:
            return permission_key(tenant_id, user_id)
        except ValueError as e:
            logger.warning(
                "Permission cache bypassed for user=%r tenant=%r: %s", user_id, tenant_id, e
            )
            return None

    async def get_user_permissions(self, user_id: str, tenant_id: str) -> set[str]:
        """Return permission names (e.g. delete_user). Uses cache if available."""
        key = self._cache_key(user_id, tenant_id)
        if key is not None and self.cache:
            cached = await self.cache.get(key)
            if cached is not None:
                return set(cached)

        permissions = await self.permission_resolver.get_user_permissions(
            user_id, tenant_id
        )
        if key is not None and self.cache:
            await self.cache.set(key, sorted(permissions), ttl=self.cache_ttl)
        return permissions

    async def build_actor(self, user_id: str, tenant_id: str) -> Actor:
        """Snapshot the user as an Actor for one or more decisions."""
        permissions = await self.get_user_permissions(user_id, tenant_id)
        return Actor(
            id=user_id, permissions=frozenset(permissions), tenant_id=tenant_id or None
        )

    async def decide(
        self,
        user_id: str,
        tenant_id: str,
        resource_type: str,
        action: str | Action,
        resource: Resource | None = None,
    ) -> Decision:
        """Resolve the actor and return the gate's decision."""
        actor = await self.build_actor(user_id, tenant_id)
        return self.gate(resource_type).decide(actor, action, resource)

    async def check_permission(
        self,
        user_id: str,
        tenant_id: str,
        resource_type: str,
        action: str | Action,
        resource: Resource | None = None,
    ) -> bool:
        """Return True if the gate grants the action."""
        decision = await self.decide(user_id, tenant_id, resource_type, action, resource)
        return decision.granted

    async def require_permission(
        self,
        user_id: str,
        tenant_id: str,
        resource_type: str,
        action: str | Action,
        resource: Resource | None = None,
    ) -> Decision:
        """Return the granting Decision, or raise AuthorizationException on denial."""
        decision = await self.decide(user_id, tenant_id, resource_type, action, resource)
        if not decision.granted:
            act = Action.parse(action)
            logger.info(
                "Permission denied: user=%s tenant=%s %s on %s (%s)",
                user_id,
                tenant_id,
                act.value,
                resource_type,
                decision.reason.value,
            )
            raise AuthorizationException(
                resource=resource_type,
                action=act.value,
                reason=decision.reason.value,
            )
        return decision

    async def invalidate_user_cache(self, user_id: str, tenant_id: str) -> None:
        """Invalidate cached permissions for one user."""
        key = self._cache_key(user_id, tenant_id)
        if key is not None and self.cache:
            await self.cache.delete(key)

    async def invalidate_tenant_cache(self, tenant_id: str) -> None:
        """Invalidate all cached permissions for a tenant."""
        if not (self.cache and self.cache.is_available()):
            return
        try:
            pattern = tenant_permission_pattern(tenant_id)
        except ValueError as e:
            logger.warning("Permission cache invalidation skipped for tenant=%r: %s", tenant_id, e)
            return
        await self.cache.delete_pattern(pattern)
