"""
Game configuration settings.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class GameConfig:
    """Configuration for a hot-seat game."""

    starting_cash: int = 1500
    go_bonus: int = 200
    collect_go_bonus: bool = True

    house_cost: int = 100
    hotel_cost: int = 250
    house_value: int = 100
    hotel_value: int = 200
    mortgage_interest_rate: float = 0.10

    jail_turns: int = 2
    send_to_jail_on_go_to_jail: bool = True

    card_amount: int = 100

    # Seconds between unit steps of a move (animation pacing only)
    step_delay: float = 0.18

    seed: Optional[int] = None


# Classic four-tier railroad rent, indexed by railroads owned - 1
DEFAULT_RAIL_RENT = (25, 50, 100, 200)

DEFAULT_RAILROAD_PRICE = 200
DEFAULT_UTILITY_PRICE = 150
DEFAULT_TAX_AMOUNT = 100

JAIL_POSITION = 10
