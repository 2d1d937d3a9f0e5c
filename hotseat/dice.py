"""
Two six-sided dice.
"""

import random
from dataclasses import dataclass
from typing import Optional

from hotseat.exceptions import InvalidActionError


@dataclass(frozen=True)
class DiceRoll:
    """Result of rolling two dice."""

    d1: int
    d2: int

    @property
    def total(self) -> int:
        return self.d1 + self.d2

    @property
    def is_double(self) -> bool:
        return self.d1 == self.d2

    @classmethod
    def manual(cls, d1: int, d2: int) -> "DiceRoll":
        """Build an explicit roll, rejecting faces outside 1-6."""
        for face in (d1, d2):
            if not 1 <= face <= 6:
                raise InvalidActionError(f"Die face must be between 1 and 6, got {face}")
        return cls(d1, d2)


class Dice:
    """Random source for rolls. Pass a seeded ``random.Random`` for reproducible games."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def roll_single(self) -> int:
        return self.rng.randint(1, 6)

    def roll_pair(self) -> DiceRoll:
        return DiceRoll(self.roll_single(), self.roll_single())
