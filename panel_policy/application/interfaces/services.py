"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol


# Permission resolver interface
class IPermissionResolver(Protocol):
    """Protocol for resolving a user's permission names in a tenant."""

    async def get_user_permissions(self, user_id: str, tenant_id: str) -> set[str]:
        """Return permission names granted through the user's active roles."""


# Cache service interface
class ICacheService(Protocol):
    """Protocol for the cache backend used by AuthorizationService."""

    def is_available(self) -> bool:
        """Return True if the cache is connected and usable."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds."""

    async def delete(self, key: str) -> bool:
        """Remove key from cache."""

    async def delete_pattern(self, pattern: str) -> int:
        """Remove all keys matching pattern; return count removed."""
