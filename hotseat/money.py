"""
Mortgage ledger and event logging.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from hotseat.player import Player
from hotseat.results import ActionResult, FailureReason
from hotseat.spaces import Tile


class EventType(Enum):
    """Types of game events."""

    GAME_START = "game_start"
    TURN_START = "turn_start"
    DICE_ROLL = "dice_roll"
    MOVE = "move"
    PASS_GO = "pass_go"
    LAND = "land"

    PURCHASE = "purchase"
    PURCHASE_DECLINED = "purchase_declined"

    RENT_PAYMENT = "rent_payment"
    TAX_PAYMENT = "tax_payment"

    CARD_EFFECT = "card_effect"

    BUILD_HOUSE = "build_house"
    BUILD_HOTEL = "build_hotel"

    MORTGAGE = "mortgage"
    UNMORTGAGE = "unmortgage"

    GO_TO_JAIL = "go_to_jail"
    JAIL_SKIP = "jail_skip"
    JAIL_RELEASE = "jail_release"

    GAME_END = "game_end"


@dataclass
class GameEvent:
    """A logged event in the game."""

    event_type: EventType
    player_id: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        player_str = f"P{self.player_id}" if self.player_id is not None else "System"
        return f"[{player_str}] {self.event_type.value}: {self.details}"


class EventLog:
    """Manages the game event log."""

    def __init__(self):
        self.events: List[GameEvent] = []

    def log(self, event_type: EventType, player_id: Optional[int] = None, **details: Any) -> None:
        """Log a game event."""
        self.events.append(GameEvent(event_type, player_id, details))

    def get_events(self) -> List[GameEvent]:
        """Get all logged events."""
        return self.events.copy()

    def of_type(self, event_type: EventType) -> List[GameEvent]:
        return [e for e in self.events if e.event_type == event_type]


class Bank:
    """
    Issues and redeems mortgages.

    Each operation either applies both of its state changes (cash and the
    mortgage flag) or neither, and reports the outcome as an ``ActionResult``.
    """

    def __init__(self, interest_rate: float = 0.10, event_log: Optional[EventLog] = None):
        self.interest_rate = interest_rate
        self.event_log = event_log or EventLog()

    def redemption_cost(self, tile: Tile) -> int:
        """Mortgage value plus interest, rounded up to a whole unit."""
        if tile.economics is None:
            return 0
        # Integer ceiling so that e.g. 10% of 30 is exactly 3
        rate_bp = round(self.interest_rate * 10000)
        value = tile.economics.mortgage
        return -(-value * (10000 + rate_bp) // 10000)

    def pay_mortgage(self, tile: Tile, player: Player) -> ActionResult:
        """Mortgage an owned tile, crediting its mortgage value."""
        econ = tile.economics
        if econ is None:
            return ActionResult.fail(FailureReason.NOT_OWNABLE)
        if econ.owner_id != player.id:
            return ActionResult.fail(FailureReason.NOT_OWNER)
        if econ.mortgaged:
            return ActionResult.fail(FailureReason.ALREADY_MORTGAGED)

        player.receive(econ.mortgage)
        econ.mortgaged = True

        self.event_log.log(
            EventType.MORTGAGE,
            player_id=player.id,
            property=tile.name,
            position=tile.id,
            value=econ.mortgage,
            new_balance=player.money,
        )
        return ActionResult.ok(econ.mortgage)

    def redeem_mortgage(self, tile: Tile, player: Player) -> ActionResult:
        """Lift a mortgage by paying its value plus interest."""
        econ = tile.economics
        if econ is None:
            return ActionResult.fail(FailureReason.NOT_OWNABLE)
        if econ.owner_id != player.id:
            return ActionResult.fail(FailureReason.NOT_OWNER)
        if not econ.mortgaged:
            return ActionResult.fail(FailureReason.NOT_MORTGAGED)

        cost = self.redemption_cost(tile)
        if player.money < cost:
            return ActionResult.fail(FailureReason.INSUFFICIENT_FUNDS)

        player.pay(cost)
        econ.mortgaged = False

        self.event_log.log(
            EventType.UNMORTGAGE,
            player_id=player.id,
            property=tile.name,
            position=tile.id,
            cost=cost,
            new_balance=player.money,
        )
        return ActionResult.ok(cost)
