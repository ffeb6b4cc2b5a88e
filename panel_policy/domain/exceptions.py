"""Domain exceptions for the panel policy layer.

Invalid invocations (a programming error at the call site) are raised
immediately. Permission denials are normal Decision values; only the
application layer turns them into AuthorizationException.
"""

from typing import Any


class PanelPolicyException(Exception):
    """Base exception for all panel policy errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. action, resource_type).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(PanelPolicyException):
    """Raised when input validation fails (e.g. an empty field name)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidActionException(PanelPolicyException):
    """Raised when an action tag names no known policy action."""

    def __init__(self, action: str, message: str | None = None) -> None:
        """Initialize with the rejected tag.

        Args:
            action: The action tag as received.
            message: Optional message; defaults to 'Unknown action: <tag>'.
        """
        super().__init__(
            message or f"Unknown action: {action}",
            "INVALID_ACTION",
            {"action": action},
        )


class InvalidInvocationException(PanelPolicyException):
    """Raised when the gate is called with arguments that break its contract.

    E.g. an instance-level action without a resource, or a collection-level
    action with one.
    """

    def __init__(self, message: str, action: str | None = None) -> None:
        details = {"action": action} if action else {}
        super().__init__(message, "INVALID_INVOCATION", details)


class AuthorizationException(PanelPolicyException):
    """Raised by AuthorizationService.require when the gate denies."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        reason: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource type, action and denial reason.

        Args:
            resource: Resource type (e.g. 'user').
            action: Action that was attempted (e.g. 'delete').
            reason: DecisionReason value (e.g. 'self_action_blocked').
            message: Message used when resource/action are omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        if reason:
            details["reason"] = reason
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(PanelPolicyException):
    """Raised when a requested resource (e.g. a role) is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SqlNotConfiguredException(PanelPolicyException):
    """Raised when an operation requires Postgres but DATABASE_URL is unset."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
