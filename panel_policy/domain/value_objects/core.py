"""Domain value objects for the panel policy layer.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from panel_policy.domain.exceptions import ValidationException

# Resource types double as permission suffixes (delete_any_user), so they
# share the snake_case shape of the action prefixes.
_RESOURCE_TYPE_RE = re.compile(r"^[a-z][a-z0-9]*(_[a-z0-9]+)*$")


@dataclass(frozen=True)
class ResourceType:
    """Value object for a resource type (e.g. 'user', 'blog_post').

    Lowercase snake_case, 1-100 characters.
    """

    value: str

    def __post_init__(self) -> None:
        """Validate non-empty, length and snake_case format.

        Raises:
            ValueError: If the value is empty, too long or badly formatted.
        """
        if not self.value:
            raise ValueError("Resource type must be a non-empty string")
        if len(self.value) > 100:
            raise ValueError("Resource type must not exceed 100 characters")
        if not _RESOURCE_TYPE_RE.match(self.value):
            raise ValueError(
                "Resource type must be lowercase snake_case (e.g., 'user', 'blog_post')"
            )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, init=False)
class AllowList:
    """Ordered set of field names eligible for activity logging.

    Duplicates are dropped keeping the first occurrence, so iteration
    order is the insertion order of the first appearance of each name.
    Fields outside the allow-list never reach a persisted log record; which
    names go in is the caller's responsibility (no PII detection here).
    """

    fields: tuple[str, ...]

    def __init__(self, fields: Iterable[str] = ()) -> None:
        """Build from any iterable of field names.

        Raises:
            ValidationException: If a name is not a non-empty string.
        """
        if isinstance(fields, str):
            raise ValidationException(
                "Allow-list must be an iterable of field names, not a string",
                field="fields",
            )
        ordered: dict[str, None] = {}
        for name in fields:
            if not isinstance(name, str) or not name.strip():
                raise ValidationException(
                    f"Allow-list field names must be non-empty strings, got {name!r}",
                    field="fields",
                )
            ordered.setdefault(name, None)
        object.__setattr__(self, "fields", tuple(ordered))

    @classmethod
    def of(cls, fields: "AllowList | Iterable[str]") -> "AllowList":
        """Return fields unchanged if already an AllowList, else build one."""
        if isinstance(fields, AllowList):
            return fields
        return cls(fields)

    def without(self, excluded: Iterable[str]) -> "AllowList":
        """Return a copy without the given names (e.g. known sensitive fields)."""
        drop = set(excluded)
        return AllowList(name for name in self.fields if name not in drop)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, name: object) -> bool:
        return name in self.fields
