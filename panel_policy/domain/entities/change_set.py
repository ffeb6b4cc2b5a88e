"""ChangeSet: the filtered, redacted field-level differences eligible for logging."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldChange:
    """Old and new value of one field."""

    old: Any
    new: Any

    @property
    def is_dirty(self) -> bool:
        """True when the values differ (value comparison, not identity)."""
        return bool(self.old != self.new)


@dataclass(frozen=True, eq=False)
class ChangeSet(Mapping[str, FieldChange]):
    """Ordered, read-only mapping of field name to FieldChange.

    Order is the allow-list order the filter produced it in, so the
    serialized form is deterministic. Equality is mapping equality, so a
    ChangeSet compares equal to a dict of the same FieldChanges.
    """

    changes: tuple[tuple[str, FieldChange], ...] = ()

    def __getitem__(self, name: str) -> FieldChange:
        for field_name, change in self.changes:
            if field_name == name:
                return change
        raise KeyError(name)

    def __iter__(self) -> Iterator[str]:
        return (field_name for field_name, _ in self.changes)

    def __len__(self) -> int:
        return len(self.changes)

    @property
    def fields(self) -> list[str]:
        return [field_name for field_name, _ in self.changes]

    def old_values(self) -> dict[str, Any]:
        """Field -> old value, in change-set order."""
        return {name: change.old for name, change in self.changes}

    def new_values(self) -> dict[str, Any]:
        """Field -> new value, in change-set order."""
        return {name: change.new for name, change in self.changes}

    def as_tuples(self) -> dict[str, tuple[Any, Any]]:
        """Field -> (old, new)."""
        return {name: (change.old, change.new) for name, change in self.changes}

    def to_properties(self) -> dict[str, dict[str, Any]]:
        """Activity log properties payload: {"old": {...}, "attributes": {...}}."""
        return {"old": self.old_values(), "attributes": self.new_values()}
