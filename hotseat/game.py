"""
Game orchestration: roll, move, resolve, refresh, advance.
"""

import asyncio
import logging
import random
from enum import Enum
from typing import Any, List, Optional

from hotseat.board import Board
from hotseat.config import GameConfig
from hotseat.dice import Dice, DiceRoll
from hotseat.exceptions import InvalidActionError
from hotseat.money import Bank, EventLog, EventType
from hotseat.player import Player
from hotseat.rules import Resolution, Rules, Standing
from hotseat.spaces import TileType
from hotseat.turns import TurnManager
from hotseat.ui.base import GameUI

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Lifecycle of a game. Transitions only move forward."""

    NOT_STARTED = "not_started"
    ACTIVE = "active"
    ENDED = "ended"


class Game:
    """
    Owns the whole in-memory game aggregate.

    Board, players, bank, rules and turn order all live here; collaborators
    receive references to it and never keep their own copies.
    """

    def __init__(
        self,
        board: Board,
        players: List[Player],
        bank: Bank,
        rules: Rules,
        turns: TurnManager,
        ui: GameUI,
        api: Any,
        dice: Optional[Dice] = None,
        config: Optional[GameConfig] = None,
        event_log: Optional[EventLog] = None,
    ):
        self.board = board
        self.players = players
        self.bank = bank
        self.rules = rules
        self.turns = turns
        self.ui = ui
        self.api = api
        self.dice = dice or Dice()
        self.config = config or GameConfig()
        self.event_log = event_log or EventLog()

        self.phase = GamePhase.NOT_STARTED
        self.last_roll: Optional[DiceRoll] = None
        self.last_resolution: Optional[Resolution] = None
        self.standings: Optional[List[Standing]] = None

    @property
    def ended(self) -> bool:
        return self.phase == GamePhase.ENDED

    def get_player(self, player_id: int) -> Player:
        """Look up a player by id. Unknown ids raise ``KeyError``."""
        for player in self.players:
            if player.id == player_id:
                return player
        raise KeyError(f"No player with id {player_id}")

    def current_player(self) -> Player:
        return self.turns.current_player()

    async def init(self) -> None:
        """
        Load the board, draw the table and hand the first turn to player one.

        Raises:
            ConfigurationError: If the board service returns no tiles.
            NetworkError: If the board cannot be fetched.
        """
        if self.phase != GamePhase.NOT_STARTED:
            raise InvalidActionError("Game has already been initialised")

        await self.board.load()
        self.ui.mount(self)
        self.ui.render_board(self.board)
        self.ui.render_players(self.players)
        self.ui.render_tokens(self.players)
        self.turns.start(self.players)
        self.phase = GamePhase.ACTIVE

        self.event_log.log(
            EventType.GAME_START,
            players=[p.nick for p in self.players],
            starting_cash=self.config.starting_cash,
            seed=self.config.seed,
        )

    async def roll_dice_or_manual(self, explicit: Optional[DiceRoll] = None) -> DiceRoll:
        """
        Roll for the current player and play out their move.

        Args:
            explicit: A fixed roll to use instead of the dice.

        Returns:
            The roll that was used.
        """
        if self.phase != GamePhase.ACTIVE:
            raise InvalidActionError(f"Cannot roll while game is {self.phase.value}")

        roll = explicit if explicit is not None else self.dice.roll_pair()
        self.last_roll = roll
        current = self.current_player()

        self.event_log.log(
            EventType.DICE_ROLL,
            player_id=current.id,
            die1=roll.d1,
            die2=roll.d2,
            total=roll.total,
            manual=explicit is not None,
        )

        await self.move_player(current, roll.total)
        return roll

    async def move_player(self, player: Player, steps: int) -> Resolution:
        """
        Move one tile at a time, then resolve the landing and pass the turn.

        Tokens are redrawn after every unit step with a pacing delay between
        steps. The delay is cosmetic; nothing depends on it.
        """
        start = player.position
        position = start
        for _ in range(steps):
            position = self.board.advance(position, 1)
            player.position = position
            if position == 0 and self.config.collect_go_bonus:
                self._collect_go(player)
            self.ui.render_tokens(self.players)
            if self.config.step_delay > 0:
                await asyncio.sleep(self.config.step_delay)

        self.event_log.log(EventType.MOVE, player_id=player.id, start=start, end=position, spaces=steps)

        tile = self.board.get_tile(position)
        if tile.type != TileType.PROPERTY:
            self.ui.notify(f"{player.nick} landed on {tile.name}", title=f"Turn {self.turns.turn_number}")

        resolution = await self.rules.resolve_tile(self, player, tile, self.last_roll)
        self.last_resolution = resolution
        self.ui.refresh()
        if not self.ended:
            self.turns.next()
        return resolution

    def _collect_go(self, player: Player) -> None:
        go_tile = self.board.get_tile(0)
        amount = go_tile.value if go_tile.type == TileType.GO else self.config.go_bonus
        player.receive(amount)
        self.event_log.log(EventType.PASS_GO, player_id=player.id, amount=amount, new_balance=player.money)

    async def end_game_manual(self) -> List[Standing]:
        """
        Finish the game, show standings and submit every score.

        Score submission failures are logged and skipped; standings are shown
        before any network call. Ending twice returns the first standings.
        """
        if self.phase == GamePhase.ENDED and self.standings is not None:
            return self.standings

        standings = self.rules.compute_standings(self)
        self.phase = GamePhase.ENDED
        self.standings = standings
        self.ui.show_standings(standings)

        self.event_log.log(
            EventType.GAME_END,
            player_id=standings[0].player_id if standings else None,
            scores={s.nick: s.score for s in standings},
        )

        for standing in standings:
            try:
                await self.api.submit_score(
                    nick_name=standing.nick,
                    score=standing.score,
                    country_code=standing.country,
                )
            except Exception as e:
                logger.warning(f"Could not register score for {standing.nick}: {e}")

        return standings


def create_game(
    api: Any,
    ui: GameUI,
    players: List[Player],
    config: Optional[GameConfig] = None,
) -> Game:
    """
    Wire up a game around the given service client and UI.

    All components share one event log and one seeded random source.
    """
    config = config or GameConfig()
    rng = random.Random(config.seed)
    event_log = EventLog()

    for player in players:
        player.money = config.starting_cash

    return Game(
        board=Board(api),
        players=players,
        bank=Bank(config.mortgage_interest_rate, event_log),
        rules=Rules(config, rng, event_log),
        turns=TurnManager(event_log),
        ui=ui,
        api=api,
        dice=Dice(rng),
        config=config,
        event_log=event_log,
    )
