"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure. Used by application and
infrastructure layers.
"""

from panel_policy.domain.entities import (
    Actor,
    ChangeSet,
    Decision,
    FieldChange,
    Resource,
)
from panel_policy.domain.enums import (
    Action,
    ActionScope,
    ActivityEvent,
    DecisionReason,
)
from panel_policy.domain.exceptions import (
    AuthorizationException,
    InvalidActionException,
    InvalidInvocationException,
    PanelPolicyException,
    ResourceNotFoundException,
    ValidationException,
)
from panel_policy.domain.value_objects import AllowList, ResourceType

__all__ = [
    # Entities
    "Actor",
    "ChangeSet",
    "Decision",
    "FieldChange",
    "Resource",
    # Enums
    "Action",
    "ActionScope",
    "ActivityEvent",
    "DecisionReason",
    # Exceptions
    "AuthorizationException",
    "InvalidActionException",
    "InvalidInvocationException",
    "PanelPolicyException",
    "ResourceNotFoundException",
    "ValidationException",
    # Value objects
    "AllowList",
    "ResourceType",
]
