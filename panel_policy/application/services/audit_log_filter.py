"""Audit log filter: which changed fields may be recorded in the activity log.

The allow-list is the only gate against PII leakage. The filter performs no
semantic detection of sensitive data; callers must keep credentials,
tokens, national IDs and raw contact identifiers out of the allow-list.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from panel_policy.domain.entities import ChangeSet, FieldChange
from panel_policy.domain.value_objects import AllowList

_MISSING = object()


@dataclass(frozen=True)
class AuditLogOptions:
    """Filter options.

    Attributes:
        only_dirty: Keep only fields whose value changed (default True).
        suppress_empty: Return None instead of an empty ChangeSet so the
            caller skips persisting a log record (default False).
    """

    only_dirty: bool = True
    suppress_empty: bool = False


DEFAULT_OPTIONS = AuditLogOptions()


class AuditLogFilter:
    """Stateless filter from (before, after, allow-list) to a ChangeSet."""

    @staticmethod
    def filter(
        before: Mapping[str, Any] | None,
        after: Mapping[str, Any] | None,
        allow_list: AllowList | Iterable[str],
        options: AuditLogOptions = DEFAULT_OPTIONS,
    ) -> ChangeSet | None:
        """Diff two snapshots and keep only allow-listed (and, by default, dirty) fields.

        A field missing from one snapshot reads as None; a field missing from
        both is treated as unchanged and never emitted. Output order follows
        the allow-list.

        Args:
            before: Snapshot before the mutation (None for a create).
            after: Snapshot after the mutation (None for a delete).
            allow_list: Field names eligible for logging.
            options: only_dirty / suppress_empty switches.

        Returns:
            The ChangeSet, or None when it is empty and suppress_empty is set.
        """
        allowed = AllowList.of(allow_list)
        old_snapshot = before or {}
        new_snapshot = after or {}

        changes: list[tuple[str, FieldChange]] = []
        for name in allowed:
            old = old_snapshot.get(name, _MISSING)
            new = new_snapshot.get(name, _MISSING)
            if old is _MISSING and new is _MISSING:
                continue
            change = FieldChange(
                old=None if old is _MISSING else old,
                new=None if new is _MISSING else new,
            )
            if options.only_dirty and not change.is_dirty:
                continue
            changes.append((name, change))

        if not changes and options.suppress_empty:
            return None
        return ChangeSet(tuple(changes))
