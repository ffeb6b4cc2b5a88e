"""panel-policy: tenant-scoped authorization gate and activity-log filter for admin panels."""

from panel_policy.application.services.audit_log_filter import (
    AuditLogFilter,
    AuditLogOptions,
)
from panel_policy.application.services.authorization_gate import AuthorizationGate
from panel_policy.domain import (
    Action,
    Actor,
    AllowList,
    ChangeSet,
    Decision,
    DecisionReason,
    FieldChange,
    Resource,
)

__version__ = "1.0.0"

__all__ = [
    "Action",
    "Actor",
    "AllowList",
    "AuditLogFilter",
    "AuditLogOptions",
    "AuthorizationGate",
    "ChangeSet",
    "Decision",
    "DecisionReason",
    "FieldChange",
    "Resource",
]
