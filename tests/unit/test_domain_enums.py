"""Tests for domain enums (Action parsing and metadata, ActivityEvent mapping)."""

import pytest

from panel_policy.domain.enums import (
    Action,
    ActionScope,
    ActivityEvent,
    DecisionReason,
)
from panel_policy.domain.exceptions import InvalidActionException


class TestActionParse:
    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("view_any", Action.VIEW_ANY),
            ("viewAny", Action.VIEW_ANY),
            ("ViewAny", Action.VIEW_ANY),
            ("forceDeleteAny", Action.FORCE_DELETE_ANY),
            ("force_delete", Action.FORCE_DELETE),
            ("DELETE", Action.DELETE),
            ("replicate", Action.REPLICATE),
            (Action.RESTORE, Action.RESTORE),
        ],
    )
    def test_accepted_tags(self, tag, expected: Action) -> None:
        assert Action.parse(tag) is expected

    @pytest.mark.parametrize("tag", ["", "remove", "delete any", None, 3])
    def test_rejected_tags(self, tag) -> None:
        with pytest.raises(InvalidActionException) as exc_info:
            Action.parse(tag)
        assert exc_info.value.error_code == "INVALID_ACTION"

    def test_unknown_tag_message(self) -> None:
        with pytest.raises(InvalidActionException, match="Unknown action: destroy"):
            Action.parse("destroy")


class TestActionMetadata:
    def test_collection_actions(self) -> None:
        collection = {a for a in Action if a.scope == ActionScope.COLLECTION}
        assert collection == {
            Action.VIEW_ANY,
            Action.CREATE,
            Action.DELETE_ANY,
            Action.RESTORE_ANY,
            Action.FORCE_DELETE_ANY,
        }

    def test_every_action_has_a_scope(self) -> None:
        for action in Action:
            assert action.scope in (ActionScope.INSTANCE, ActionScope.COLLECTION)
            assert action.requires_resource == (action.scope == ActionScope.INSTANCE)

    def test_destructive_actions(self) -> None:
        assert {a for a in Action if a.is_destructive} == {Action.DELETE, Action.FORCE_DELETE}

    def test_label(self) -> None:
        assert Action.FORCE_DELETE_ANY.label == "Force delete any"
        assert Action.VIEW.label == "View"

    def test_values(self) -> None:
        assert len(Action.values()) == 11
        assert "delete_any" in Action.values()
        assert DecisionReason.values() == [
            "granted",
            "permission_missing",
            "self_action_blocked",
            "tenant_mismatch",
        ]


class TestActivityEvent:
    @pytest.mark.parametrize(
        "action,event",
        [
            (Action.CREATE, ActivityEvent.CREATED),
            (Action.UPDATE, ActivityEvent.UPDATED),
            (Action.DELETE, ActivityEvent.DELETED),
            (Action.RESTORE, ActivityEvent.RESTORED),
            (Action.FORCE_DELETE, ActivityEvent.FORCE_DELETED),
            (Action.REPLICATE, ActivityEvent.REPLICATED),
        ],
    )
    def test_for_action(self, action: Action, event: ActivityEvent) -> None:
        assert ActivityEvent.for_action(action) is event

    @pytest.mark.parametrize("action", [Action.VIEW, Action.VIEW_ANY, Action.DELETE_ANY])
    def test_non_mutations_rejected(self, action: Action) -> None:
        with pytest.raises(InvalidActionException, match="is not a mutation"):
            ActivityEvent.for_action(action)
