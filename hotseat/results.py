"""
Structured outcomes for rule-checked operations.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FailureReason(str, Enum):
    """Why a bank or construction operation was refused."""

    NOT_OWNER = "not_owner"
    NOT_OWNABLE = "not_ownable"
    NOT_A_STREET = "not_a_street"
    ALREADY_MORTGAGED = "already_mortgaged"
    NOT_MORTGAGED = "not_mortgaged"
    MORTGAGED = "mortgaged"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    HAS_HOTEL = "has_hotel"
    MAX_HOUSES = "max_houses"
    INCOMPLETE_SET = "incomplete_set"
    NEEDS_FOUR_HOUSES = "needs_four_houses"


@dataclass(frozen=True)
class ActionResult:
    """Outcome of an operation that may be refused without raising."""

    success: bool
    amount: int = 0
    reason: Optional[FailureReason] = None

    @classmethod
    def ok(cls, amount: int = 0) -> "ActionResult":
        return cls(True, amount)

    @classmethod
    def fail(cls, reason: FailureReason) -> "ActionResult":
        return cls(False, 0, reason)

    def __bool__(self) -> bool:
        return self.success
