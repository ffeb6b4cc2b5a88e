"""Domain enumerations: policy actions, action scopes and decision reasons.

Enums are closed sets; metadata (scope, destructive flag, label) is
looked up from static tables rather than computed per call.
"""

from enum import Enum

from panel_policy.domain.exceptions import InvalidActionException


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ActionScope(_ValuesMixin, str, Enum):
    """Whether an action targets one record or the whole collection."""

    INSTANCE = "instance"
    COLLECTION = "collection"


class Action(_ValuesMixin, str, Enum):
    """Policy actions. Value is the permission prefix (e.g. delete_any)."""

    VIEW_ANY = "view_any"
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    DELETE_ANY = "delete_any"
    RESTORE = "restore"
    RESTORE_ANY = "restore_any"
    FORCE_DELETE = "force_delete"
    FORCE_DELETE_ANY = "force_delete_any"
    REPLICATE = "replicate"

    @property
    def scope(self) -> ActionScope:
        """Instance or collection scope."""
        return _ACTION_SCOPES[self]

    @property
    def requires_resource(self) -> bool:
        """True when decide() needs a target resource."""
        return self.scope == ActionScope.INSTANCE

    @property
    def is_destructive(self) -> bool:
        """True for actions blocked on the actor's own resource."""
        return self in _DESTRUCTIVE_ACTIONS

    @property
    def label(self) -> str:
        """Human-readable label (e.g. 'Force delete any')."""
        return self.value.replace("_", " ").capitalize()

    @classmethod
    def parse(cls, tag: "str | Action") -> "Action":
        """Return the Action for a tag in snake_case or camelCase.

        Accepts 'delete_any', 'deleteAny' and 'DeleteAny' alike.

        Raises:
            InvalidActionException: If the tag names no known action.
        """
        if isinstance(tag, cls):
            return tag
        if not isinstance(tag, str) or not tag:
            raise InvalidActionException(str(tag))
        if tag.isupper():
            normalized = tag.lower()
        else:
            normalized = "".join(
                f"_{c.lower()}" if c.isupper() else c for c in tag
            ).lstrip("_")
        try:
            return cls(normalized)
        except ValueError:
            raise InvalidActionException(tag) from None


_ACTION_SCOPES: dict[Action, ActionScope] = {
    Action.VIEW_ANY: ActionScope.COLLECTION,
    Action.VIEW: ActionScope.INSTANCE,
    Action.CREATE: ActionScope.COLLECTION,
    Action.UPDATE: ActionScope.INSTANCE,
    Action.DELETE: ActionScope.INSTANCE,
    Action.DELETE_ANY: ActionScope.COLLECTION,
    Action.RESTORE: ActionScope.INSTANCE,
    Action.RESTORE_ANY: ActionScope.COLLECTION,
    Action.FORCE_DELETE: ActionScope.INSTANCE,
    Action.FORCE_DELETE_ANY: ActionScope.COLLECTION,
    Action.REPLICATE: ActionScope.INSTANCE,
}

_DESTRUCTIVE_ACTIONS: frozenset[Action] = frozenset(
    {Action.DELETE, Action.FORCE_DELETE}
)


class DecisionReason(_ValuesMixin, str, Enum):
    """Why the gate granted or denied an action."""

    GRANTED = "granted"
    PERMISSION_MISSING = "permission_missing"
    SELF_ACTION_BLOCKED = "self_action_blocked"
    TENANT_MISMATCH = "tenant_mismatch"


class ActivityEvent(_ValuesMixin, str, Enum):
    """Activity log event names (what happened to the subject)."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    RESTORED = "restored"
    FORCE_DELETED = "force_deleted"
    REPLICATED = "replicated"
    LOGIN = "login"
    LOGOUT = "logout"

    @classmethod
    def for_action(cls, action: Action) -> "ActivityEvent":
        """Map a mutating policy action to its activity event.

        Raises:
            InvalidActionException: If the action does not mutate a record.
        """
        try:
            return _ACTION_EVENTS[action]
        except KeyError:
            raise InvalidActionException(
                action.value, message=f"Action '{action.value}' is not a mutation"
            ) from None


_ACTION_EVENTS: dict[Action, ActivityEvent] = {
    Action.CREATE: ActivityEvent.CREATED,
    Action.UPDATE: ActivityEvent.UPDATED,
    Action.DELETE: ActivityEvent.DELETED,
    Action.RESTORE: ActivityEvent.RESTORED,
    Action.FORCE_DELETE: ActivityEvent.FORCE_DELETED,
    Action.REPLICATE: ActivityEvent.REPLICATED,
}
