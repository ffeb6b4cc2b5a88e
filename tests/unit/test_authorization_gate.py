"""Tests for AuthorizationGate (self-action block, permission derivation, contract errors)."""

import pytest

from panel_policy.application.services.authorization_gate import AuthorizationGate
from panel_policy.domain.entities import Actor, Resource
from panel_policy.domain.enums import Action, DecisionReason
from panel_policy.domain.exceptions import (
    InvalidActionException,
    InvalidInvocationException,
)

ALL_USER_PERMISSIONS = frozenset(f"{a.value}_user" for a in Action)
INSTANCE_ACTIONS = [a for a in Action if a.requires_resource]
COLLECTION_ACTIONS = [a for a in Action if not a.requires_resource]
DESTRUCTIVE_ACTIONS = [a for a in Action if a.is_destructive]


@pytest.fixture
def gate() -> AuthorizationGate:
    return AuthorizationGate("user")


class TestScenarios:
    """Worked examples of the delete policy on users."""

    def test_delete_self_is_blocked(self, gate: AuthorizationGate) -> None:
        actor = Actor(id=1, permissions=frozenset({"delete_user"}))
        decision = gate.decide(actor, "delete", Resource(id=1, owner_id=1))
        assert decision.granted is False
        assert decision.reason == DecisionReason.SELF_ACTION_BLOCKED
        assert decision.permission == "delete_user"

    def test_delete_other_is_granted(self, gate: AuthorizationGate) -> None:
        actor = Actor(id=1, permissions=frozenset({"delete_user"}))
        decision = gate.decide(actor, "delete", Resource(id=2, owner_id=2))
        assert decision.granted is True
        assert decision.reason == DecisionReason.GRANTED

    def test_delete_other_without_permission_is_denied(self, gate: AuthorizationGate) -> None:
        actor = Actor(id=1, permissions=frozenset({"view_user"}))
        decision = gate.decide(actor, Action.DELETE, Resource(id=2, owner_id=2))
        assert decision.granted is False
        assert decision.reason == DecisionReason.PERMISSION_MISSING


class TestSelfActionBlock:
    """Destructive actions on the actor's own resource are always denied."""

    @pytest.mark.parametrize("action", DESTRUCTIVE_ACTIONS)
    @pytest.mark.parametrize(
        "permissions",
        [frozenset(), frozenset({"delete_user", "force_delete_user"}), ALL_USER_PERMISSIONS],
    )
    def test_blocked_regardless_of_permissions(
        self, gate: AuthorizationGate, action: Action, permissions: frozenset[str]
    ) -> None:
        actor = Actor(id="u1", permissions=permissions)
        decision = gate.decide(actor, action, Resource.self_owned("u1"))
        assert decision.denied
        assert decision.reason == DecisionReason.SELF_ACTION_BLOCKED

    @pytest.mark.parametrize(
        "action", [a for a in INSTANCE_ACTIONS if not a.is_destructive]
    )
    def test_non_destructive_on_self_follows_permissions(
        self, gate: AuthorizationGate, action: Action
    ) -> None:
        actor = Actor(id="u1", permissions=ALL_USER_PERMISSIONS)
        assert gate.decide(actor, action, Resource.self_owned("u1")).granted

    def test_owner_differs_from_id(self, gate: AuthorizationGate) -> None:
        """Ownership, not the record id, drives the block."""
        actor = Actor(id="u1", permissions=frozenset({"delete_user"}))
        assert gate.decide(actor, "delete", Resource(id="u1", owner_id="u2")).granted
        blocked = gate.decide(actor, "delete", Resource(id="r9", owner_id="u1"))
        assert blocked.reason == DecisionReason.SELF_ACTION_BLOCKED

    def test_unowned_resource_is_not_blocked(self, gate: AuthorizationGate) -> None:
        actor = Actor(id="u1", permissions=frozenset({"delete_user"}))
        assert gate.decide(actor, "delete", Resource(id="r1", owner_id=None)).granted


class TestPermissionMembership:
    """For resources the actor does not own, granted iff the permission is held."""

    @pytest.mark.parametrize("action", INSTANCE_ACTIONS)
    def test_instance_granted_iff_permission(
        self, gate: AuthorizationGate, action: Action
    ) -> None:
        resource = Resource(id="r1", owner_id="someone-else")
        with_perm = Actor(id="u1", permissions=frozenset({f"{action.value}_user"}))
        without = Actor(id="u1", permissions=ALL_USER_PERMISSIONS - {f"{action.value}_user"})
        assert gate.decide(with_perm, action, resource).granted
        denied = gate.decide(without, action, resource)
        assert denied.reason == DecisionReason.PERMISSION_MISSING

    @pytest.mark.parametrize("action", COLLECTION_ACTIONS)
    def test_collection_granted_iff_permission(
        self, gate: AuthorizationGate, action: Action
    ) -> None:
        with_perm = Actor(id="u1", permissions=frozenset({f"{action.value}_user"}))
        assert gate.decide(with_perm, action).granted
        assert not gate.decide(Actor(id="u1"), action).granted

    def test_permission_for_other_resource_type_does_not_count(self) -> None:
        actor = Actor(id="u1", permissions=frozenset({"delete_any_role"}))
        assert not AuthorizationGate("user").allows(actor, "deleteAny")
        assert AuthorizationGate("role").allows(actor, "deleteAny")

    def test_camel_case_tags_accepted(self, gate: AuthorizationGate) -> None:
        actor = Actor(id="u1", permissions=frozenset({"force_delete_user", "view_any_user"}))
        assert gate.decide(actor, "viewAny").granted
        assert gate.decide(actor, "forceDelete", Resource(id="r", owner_id="x")).granted

    def test_permission_for(self, gate: AuthorizationGate) -> None:
        assert gate.permission_for("deleteAny") == "delete_any_user"
        assert gate.permission_for(Action.FORCE_DELETE) == "force_delete_user"


class TestTenantBoundary:
    """Instance actions across tenants are denied when both tenants are known."""

    def test_cross_tenant_denied(self, gate: AuthorizationGate) -> None:
        actor = Actor(id="u1", permissions=ALL_USER_PERMISSIONS, tenant_id="t1")
        decision = gate.decide(actor, "update", Resource(id="r", owner_id="x", tenant_id="t2"))
        assert decision.reason == DecisionReason.TENANT_MISMATCH

    def test_same_tenant_granted(self, gate: AuthorizationGate) -> None:
        actor = Actor(id="u1", permissions=ALL_USER_PERMISSIONS, tenant_id="t1")
        assert gate.decide(actor, "update", Resource(id="r", owner_id="x", tenant_id="t1"))

    def test_unknown_tenant_falls_back_to_permissions(self, gate: AuthorizationGate) -> None:
        actor = Actor(id="u1", permissions=ALL_USER_PERMISSIONS)
        assert gate.decide(actor, "update", Resource(id="r", owner_id="x", tenant_id="t2"))

    def test_self_block_wins_over_tenant_mismatch(self, gate: AuthorizationGate) -> None:
        actor = Actor(id="u1", permissions=ALL_USER_PERMISSIONS, tenant_id="t1")
        decision = gate.decide(actor, "delete", Resource(id="u1", owner_id="u1", tenant_id="t2"))
        assert decision.reason == DecisionReason.SELF_ACTION_BLOCKED


class TestContractViolations:
    """Invalid invocations raise instead of silently denying."""

    @pytest.mark.parametrize("action", INSTANCE_ACTIONS)
    def test_instance_action_without_resource(
        self, gate: AuthorizationGate, action: Action
    ) -> None:
        with pytest.raises(InvalidInvocationException) as exc_info:
            gate.decide(Actor(id="u1", permissions=ALL_USER_PERMISSIONS), action)
        assert exc_info.value.error_code == "INVALID_INVOCATION"
        assert exc_info.value.details["action"] == action.value

    def test_collection_action_with_resource(self, gate: AuthorizationGate) -> None:
        with pytest.raises(InvalidInvocationException):
            gate.decide(Actor(id="u1"), "view_any", Resource(id="r", owner_id="x"))

    @pytest.mark.parametrize("tag", ["", "destroy", "DELETEANY", "delete-any", "view any"])
    def test_unknown_action(self, gate: AuthorizationGate, tag: str) -> None:
        with pytest.raises(InvalidActionException) as exc_info:
            gate.decide(Actor(id="u1"), tag)
        assert exc_info.value.error_code == "INVALID_ACTION"

    def test_invalid_resource_type(self) -> None:
        with pytest.raises(ValueError, match="snake_case"):
            AuthorizationGate("Blog-Post")


def test_decisions_are_deterministic(gate: AuthorizationGate) -> None:
    actor = Actor(id="u1", permissions=frozenset({"update_user"}))
    resource = Resource(id="r", owner_id="x")
    assert gate.decide(actor, "update", resource) == gate.decide(actor, "update", resource)
