"""Cache: Redis service and cache key builders (permission sets)."""

from panel_policy.infrastructure.cache.keys import (
    permission_key,
    tenant_permission_pattern,
)
from panel_policy.infrastructure.cache.redis_cache import CacheService

__all__ = ["CacheService", "permission_key", "tenant_permission_pattern"]
