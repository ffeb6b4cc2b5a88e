"""Domain value objects (immutable, self-validating)."""

from panel_policy.domain.value_objects.core import AllowList, ResourceType

__all__ = ["AllowList", "ResourceType"]
