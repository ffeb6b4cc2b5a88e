"""Application services: authorization gate, audit log filter, activity logging."""

from panel_policy.application.services.activity_log_service import ActivityLogService
from panel_policy.application.services.audit_log_filter import (
    AuditLogFilter,
    AuditLogOptions,
)
from panel_policy.application.services.authorization_gate import AuthorizationGate
from panel_policy.application.services.authorization_service import AuthorizationService
from panel_policy.application.services.permission_catalog import (
    PermissionCatalog,
    RoleDefinition,
    permission_name,
    permissions_for,
)

__all__ = [
    "ActivityLogService",
    "AuditLogFilter",
    "AuditLogOptions",
    "AuthorizationGate",
    "AuthorizationService",
    "PermissionCatalog",
    "RoleDefinition",
    "permission_name",
    "permissions_for",
]
