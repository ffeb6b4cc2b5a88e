"""Tests for the panel policy exception hierarchy."""

import pytest

from panel_policy.domain.exceptions import (
    AuthorizationException,
    InvalidActionException,
    InvalidInvocationException,
    PanelPolicyException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)


def test_base_defaults_error_code_to_class_name() -> None:
    exc = PanelPolicyException("boom")
    assert exc.error_code == "PanelPolicyException"
    assert exc.details == {}
    assert str(exc) == "boom"


@pytest.mark.parametrize(
    "exc,code",
    [
        (ValidationException("bad", field="name"), "VALIDATION_ERROR"),
        (InvalidActionException("destroy"), "INVALID_ACTION"),
        (InvalidInvocationException("no resource", action="delete"), "INVALID_INVOCATION"),
        (AuthorizationException("user", "delete"), "PERMISSION_DENIED"),
        (ResourceNotFoundException("role", "super_admin"), "RESOURCE_NOT_FOUND"),
        (SqlNotConfiguredException(), "SERVICE_UNAVAILABLE"),
    ],
)
def test_error_codes(exc: PanelPolicyException, code: str) -> None:
    assert isinstance(exc, PanelPolicyException)
    assert exc.error_code == code


def test_authorization_exception_details() -> None:
    exc = AuthorizationException("user", "delete", "self_action_blocked")
    assert exc.message == "Permission denied: delete on user"
    assert exc.details == {
        "resource": "user",
        "action": "delete",
        "reason": "self_action_blocked",
    }


def test_authorization_exception_without_context() -> None:
    exc = AuthorizationException()
    assert exc.message == "Permission denied"
    assert exc.details == {}


def test_invalid_action_custom_message() -> None:
    exc = InvalidActionException("view", message="Action 'view' is not a mutation")
    assert exc.message == "Action 'view' is not a mutation"
    assert exc.details == {"action": "view"}


def test_validation_without_field_has_no_details() -> None:
    assert ValidationException("bad").details == {}


def test_resource_not_found_message() -> None:
    exc = ResourceNotFoundException("role", "editor")
    assert exc.message == "role not found: editor"
