"""Decision: outcome of one authorization check."""

from dataclasses import dataclass

from panel_policy.domain.enums import DecisionReason


@dataclass(frozen=True)
class Decision:
    """Boolean outcome paired with the reason and the permission checked."""

    granted: bool
    reason: DecisionReason
    permission: str

    @classmethod
    def allow(cls, permission: str) -> "Decision":
        return cls(granted=True, reason=DecisionReason.GRANTED, permission=permission)

    @classmethod
    def deny(cls, permission: str, reason: DecisionReason) -> "Decision":
        if reason == DecisionReason.GRANTED:
            raise ValueError("A denial needs a denial reason")
        return cls(granted=False, reason=reason, permission=permission)

    @property
    def denied(self) -> bool:
        return not self.granted

    def __bool__(self) -> bool:
        return self.granted
