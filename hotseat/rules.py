"""
Rules engine: construction, rent, landing effects and standings.

Operations that can be refused for ordinary rule reasons return an
``ActionResult`` instead of raising, so the UI can show the reason.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from hotseat.board import Board
from hotseat.config import JAIL_POSITION, GameConfig
from hotseat.dice import DiceRoll
from hotseat.money import EventLog, EventType
from hotseat.player import Player
from hotseat.results import ActionResult, FailureReason
from hotseat.spaces import Tile, TileType
from hotseat.ui.base import ManageAction, ManageRequest, PurchaseRequest

if TYPE_CHECKING:
    from hotseat.game import Game


class Effect(Enum):
    """What resolving a tile did."""

    NONE = "none"
    PURCHASED = "purchased"
    DECLINED = "declined"
    RENT = "rent"
    MORTGAGED_NO_RENT = "mortgaged_no_rent"
    MANAGED = "managed"
    TAX = "tax"
    CARD = "card"
    JAILED = "jailed"


@dataclass(frozen=True)
class Resolution:
    """Outcome of landing on a tile."""

    tile_id: int
    effect: Effect
    amount: int = 0
    counterparty: Optional[int] = None
    action: Optional[ManageAction] = None
    result: Optional[ActionResult] = None


@dataclass(frozen=True)
class Standing:
    """One row of the final ranking."""

    player_id: int
    nick: str
    country: Optional[str]
    score: int


class Rules:
    """Central resolver for everything that happens on a tile."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        event_log: Optional[EventLog] = None,
    ):
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.event_log = event_log or EventLog()

    # === CONSTRUCTION ===

    def owns_color_set(self, board: Board, player: Player, color: Optional[str]) -> bool:
        """True if the color group is non-empty and every street in it belongs to the player."""
        if color is None:
            return False
        group = board.tiles_of_color(color)
        return bool(group) and all(t.owner_id == player.id for t in group)

    def check_build_house(self, board: Board, player: Player, tile: Tile) -> ActionResult:
        """
        Check whether a house may be added, ignoring the player's cash.

        Requirements:
        - Player owns the street
        - No hotel and fewer than 4 houses
        - Street is not mortgaged
        - Player owns the whole color group
        """
        econ = tile.economics
        if econ is None:
            return ActionResult.fail(FailureReason.NOT_OWNABLE)
        if econ.owner_id != player.id:
            return ActionResult.fail(FailureReason.NOT_OWNER)
        if tile.type != TileType.PROPERTY or tile.color is None:
            return ActionResult.fail(FailureReason.NOT_A_STREET)
        if econ.hotel:
            return ActionResult.fail(FailureReason.HAS_HOTEL)
        if econ.houses >= 4:
            return ActionResult.fail(FailureReason.MAX_HOUSES)
        if econ.mortgaged:
            return ActionResult.fail(FailureReason.MORTGAGED)
        if not self.owns_color_set(board, player, tile.color):
            return ActionResult.fail(FailureReason.INCOMPLETE_SET)
        return ActionResult.ok()

    def can_build_house(self, board: Board, player: Player, tile: Tile) -> bool:
        return self.check_build_house(board, player, tile).success

    def build_house(self, board: Board, player: Player, tile: Tile) -> ActionResult:
        """Build one house for the fixed house cost."""
        check = self.check_build_house(board, player, tile)
        if not check:
            return check

        cost = self.config.house_cost
        if player.money < cost:
            return ActionResult.fail(FailureReason.INSUFFICIENT_FUNDS)

        player.pay(cost)
        tile.economics.houses += 1

        self.event_log.log(
            EventType.BUILD_HOUSE,
            player_id=player.id,
            property=tile.name,
            position=tile.id,
            cost=cost,
            houses=tile.economics.houses,
            new_balance=player.money,
        )
        return ActionResult.ok(cost)

    def check_build_hotel(self, player: Player, tile: Tile) -> ActionResult:
        """Check whether a hotel may replace exactly four houses."""
        econ = tile.economics
        if econ is None:
            return ActionResult.fail(FailureReason.NOT_OWNABLE)
        if econ.owner_id != player.id:
            return ActionResult.fail(FailureReason.NOT_OWNER)
        if econ.hotel:
            return ActionResult.fail(FailureReason.HAS_HOTEL)
        if econ.houses != 4:
            return ActionResult.fail(FailureReason.NEEDS_FOUR_HOUSES)
        if econ.mortgaged:
            return ActionResult.fail(FailureReason.MORTGAGED)
        return ActionResult.ok()

    def can_build_hotel(self, player: Player, tile: Tile) -> bool:
        return self.check_build_hotel(player, tile).success

    def build_hotel(self, player: Player, tile: Tile) -> ActionResult:
        """Replace four houses with a hotel."""
        check = self.check_build_hotel(player, tile)
        if not check:
            return check

        cost = self.config.hotel_cost
        if player.money < cost:
            return ActionResult.fail(FailureReason.INSUFFICIENT_FUNDS)

        player.pay(cost)
        tile.economics.hotel = True
        tile.economics.houses = 0

        self.event_log.log(
            EventType.BUILD_HOTEL,
            player_id=player.id,
            property=tile.name,
            position=tile.id,
            cost=cost,
            new_balance=player.money,
        )
        return ActionResult.ok(cost)

    # === RENT ===

    def rent_for(self, board: Board, tile: Tile, dice_total: Optional[int] = None) -> int:
        """
        Rent owed for landing on a tile right now.

        Railroad rent is tiered by how many railroads the owner holds at
        this moment. Utility rent multiplies the dice total by 4 (one
        utility owned) or 10 (both).
        """
        econ = tile.economics
        if econ is None or not econ.is_owned() or econ.mortgaged:
            return 0

        if tile.type == TileType.RAILROAD:
            owned = board.count_owned(econ.owner_id, TileType.RAILROAD)
            return econ.rent.for_railroads(owned)

        if tile.type == TileType.UTILITY:
            if dice_total is None:
                return econ.rent.base
            owned = board.count_owned(econ.owner_id, TileType.UTILITY)
            multiplier = 4 if owned == 1 else 10
            return dice_total * multiplier

        return tile.get_rent()

    # === STANDINGS ===

    def net_worth(self, board: Board, player: Player) -> int:
        """Cash plus owned tiles at price, improvements, minus price when mortgaged."""
        worth = player.money
        for tile in board.ownable_tiles():
            econ = tile.economics
            if econ.owner_id != player.id:
                continue
            worth += econ.price
            if econ.hotel:
                worth += self.config.hotel_value
            else:
                worth += econ.houses * self.config.house_value
            if econ.mortgaged:
                worth -= econ.price
        return worth

    def compute_standings(self, game: "Game") -> List[Standing]:
        """Players ranked by net worth, highest first; ties keep seating order."""
        rows = [
            Standing(p.id, p.nick, p.country, self.net_worth(game.board, p))
            for p in game.players
        ]
        return sorted(rows, key=lambda s: -s.score)

    # === LANDING ===

    async def resolve_tile(
        self,
        game: "Game",
        player: Player,
        tile: Tile,
        roll: Optional[DiceRoll] = None,
    ) -> Resolution:
        """
        Apply the effect of landing on a tile.

        Purchases and owner management suspend on the UI's decision. Every
        branch that changes shared state ends with ``ui.refresh()``.
        """
        self.event_log.log(EventType.LAND, player_id=player.id, position=tile.id, space=tile.name)

        if tile.is_ownable:
            econ = tile.economics
            if not econ.is_owned():
                return await self._offer_purchase(game, player, tile)
            if econ.owner_id != player.id:
                if econ.mortgaged:
                    owner = game.get_player(econ.owner_id)
                    game.ui.toast(f"{tile.name} is mortgaged: {player.nick} pays no rent to {owner.nick}")
                    return Resolution(tile.id, Effect.MORTGAGED_NO_RENT, counterparty=owner.id)
                return self._charge_rent(game, player, tile, roll)
            return await self._offer_management(game, player, tile)

        if tile.type == TileType.TAX:
            amount = abs(tile.value)
            player.pay(amount)
            self.event_log.log(
                EventType.TAX_PAYMENT, player_id=player.id, amount=amount, new_balance=player.money
            )
            game.ui.toast(f"{player.nick} pays tax ${amount}")
            game.ui.refresh()
            return Resolution(tile.id, Effect.TAX, amount)

        if tile.type in (TileType.CHANCE, TileType.COMMUNITY):
            return self._flip_card(game, player, tile)

        if tile.type == TileType.JAIL:
            self._confine(player)
            game.ui.toast(f"{player.nick} goes to jail ({self.config.jail_turns} turns)")
            game.ui.refresh()
            return Resolution(tile.id, Effect.JAILED)

        if tile.type == TileType.GO_TO_JAIL and self.config.send_to_jail_on_go_to_jail:
            jail = game.board.find_first(TileType.JAIL)
            player.position = jail.id if jail else JAIL_POSITION
            self._confine(player)
            game.ui.render_tokens(game.players)
            game.ui.toast(f"{player.nick} is sent to jail ({self.config.jail_turns} turns)")
            game.ui.refresh()
            return Resolution(tile.id, Effect.JAILED)

        # GO, free parking, specials
        return Resolution(tile.id, Effect.NONE)

    async def _offer_purchase(self, game: "Game", player: Player, tile: Tile) -> Resolution:
        econ = tile.economics
        request = PurchaseRequest(player, tile, econ.price, tile.get_rent())
        accepted = await game.ui.decide_purchase(request)
        if not accepted:
            self.event_log.log(EventType.PURCHASE_DECLINED, player_id=player.id, position=tile.id)
            return Resolution(tile.id, Effect.DECLINED)

        player.pay(econ.price)
        econ.owner_id = player.id
        player.properties.add(tile.id)

        self.event_log.log(
            EventType.PURCHASE,
            player_id=player.id,
            property=tile.name,
            position=tile.id,
            price=econ.price,
            new_balance=player.money,
        )
        game.ui.refresh()
        return Resolution(tile.id, Effect.PURCHASED, econ.price)

    def _charge_rent(
        self, game: "Game", player: Player, tile: Tile, roll: Optional[DiceRoll]
    ) -> Resolution:
        owner = game.get_player(tile.economics.owner_id)
        rent = self.rent_for(game.board, tile, roll.total if roll else None)

        player.pay(rent)
        owner.receive(rent)

        self.event_log.log(
            EventType.RENT_PAYMENT,
            player_id=player.id,
            owner=owner.id,
            amount=rent,
            payer_balance=player.money,
            owner_balance=owner.money,
        )
        game.ui.toast(f"{player.nick} pays rent ${rent} to {owner.nick}")
        game.ui.refresh()
        return Resolution(tile.id, Effect.RENT, rent, counterparty=owner.id)

    def available_actions(self, board: Board, player: Player, tile: Tile) -> List[ManageAction]:
        """Management actions the owner may choose on this tile."""
        actions: List[ManageAction] = []
        if self.can_build_house(board, player, tile):
            actions.append(ManageAction.BUILD_HOUSE)
        if self.can_build_hotel(player, tile):
            actions.append(ManageAction.BUILD_HOTEL)
        if tile.economics.mortgaged:
            actions.append(ManageAction.REDEEM)
        else:
            actions.append(ManageAction.MORTGAGE)
        return actions

    def apply_management(
        self, game: "Game", player: Player, tile: Tile, action: ManageAction
    ) -> ActionResult:
        """Run one management action through the rules or the bank."""
        if action == ManageAction.BUILD_HOUSE:
            return self.build_house(game.board, player, tile)
        if action == ManageAction.BUILD_HOTEL:
            return self.build_hotel(player, tile)
        if action == ManageAction.MORTGAGE:
            return game.bank.pay_mortgage(tile, player)
        return game.bank.redeem_mortgage(tile, player)

    async def _offer_management(self, game: "Game", player: Player, tile: Tile) -> Resolution:
        request = ManageRequest(player, tile, self.available_actions(game.board, player, tile))
        action = await game.ui.decide_management(request)
        if action is None:
            return Resolution(tile.id, Effect.NONE)

        result = self.apply_management(game, player, tile, action)
        if not result:
            game.ui.toast(f"{action.value} on {tile.name} refused: {result.reason.value}")
        game.ui.refresh()
        return Resolution(tile.id, Effect.MANAGED, result.amount, action=action, result=result)

    def _flip_card(self, game: "Game", player: Player, tile: Tile) -> Resolution:
        amount = self.config.card_amount
        delta = -amount if self.rng.random() < 0.5 else amount
        if delta > 0:
            player.receive(delta)
        else:
            player.pay(-delta)

        self.event_log.log(
            EventType.CARD_EFFECT,
            player_id=player.id,
            deck=tile.type.value,
            amount=delta,
            new_balance=player.money,
        )
        label = "Chance" if tile.type == TileType.CHANCE else "Community"
        sign = "+" if delta > 0 else ""
        game.ui.toast(f"{label}: {sign}{delta}")
        game.ui.refresh()
        return Resolution(tile.id, Effect.CARD, delta)

    def _confine(self, player: Player) -> None:
        player.in_jail = True
        player.jail_turns = self.config.jail_turns
        self.event_log.log(EventType.GO_TO_JAIL, player_id=player.id, turns=player.jail_turns)
