"""Domain entities: actor/resource snapshots, decisions and change-sets."""

from panel_policy.domain.entities.actor import Actor, Identifier, Resource
from panel_policy.domain.entities.change_set import ChangeSet, FieldChange
from panel_policy.domain.entities.decision import Decision

__all__ = [
    "Actor",
    "ChangeSet",
    "Decision",
    "FieldChange",
    "Identifier",
    "Resource",
]
