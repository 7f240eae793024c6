"""Action results returned by the engine."""

from dataclasses import dataclass
from enum import Enum


class RefusalReason(Enum):
    """Why the engine refused an action."""

    ILLEGAL_ACTION = "illegal_action"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    SHOE_DEPLETED = "shoe_depleted"


@dataclass(frozen=True)
class ActionResult:
    """
    Status returned by every engine action.

    Truthy when the action was applied. A refused result carries the reason
    and a human-readable message; the engine state is unchanged.
    """

    accepted: bool
    reason: RefusalReason | None = None
    message: str = ""

    @classmethod
    def ok(cls) -> "ActionResult":
        return cls(accepted=True)

    @classmethod
    def refused(cls, reason: RefusalReason, message: str) -> "ActionResult":
        return cls(accepted=False, reason=reason, message=message)

    def __bool__(self) -> bool:
        return self.accepted
