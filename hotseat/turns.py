"""
Turn sequencing with jail skips.
"""

from typing import List, Optional

from hotseat.exceptions import InvalidActionError
from hotseat.money import EventLog, EventType
from hotseat.player import Player


class TurnManager:
    """
    Cycles through a fixed player order.

    A jailed player loses one remaining jail turn each time the rotation
    reaches them. They are skipped while turns remain and play as soon as
    the counter hits zero.
    """

    def __init__(self, event_log: Optional[EventLog] = None):
        self.event_log = event_log or EventLog()
        self.players: List[Player] = []
        self.current_index = 0
        self.turn_number = 0

    def start(self, players: List[Player]) -> Player:
        """Begin rotation with the first player."""
        if not players:
            raise InvalidActionError("Cannot start turns without players")
        self.players = list(players)
        self.current_index = 0
        self.turn_number = 1
        return self.current_player()

    def current_player(self) -> Player:
        return self.players[self.current_index]

    def next(self) -> Player:
        """
        Advance to the next eligible player.

        At most one full lap is scanned. If every player visited is still
        confined after that lap, the player reached is released and plays.
        """
        count = len(self.players)
        for _ in range(count):
            self.current_index = (self.current_index + 1) % count
            if self._admit(self.current_player()):
                break
        else:
            self._release(self.current_player(), reason="lap_exhausted")

        self.turn_number += 1
        self.event_log.log(
            EventType.TURN_START,
            player_id=self.current_player().id,
            turn=self.turn_number,
        )
        return self.current_player()

    def _admit(self, player: Player) -> bool:
        """Consume one jail turn; True if the player may take this turn."""
        if not player.in_jail:
            return True
        player.jail_turns = max(0, player.jail_turns - 1)
        if player.jail_turns > 0:
            self.event_log.log(EventType.JAIL_SKIP, player_id=player.id, remaining=player.jail_turns)
            return False
        self._release(player, reason="served")
        return True

    def _release(self, player: Player, reason: str) -> None:
        player.in_jail = False
        player.jail_turns = 0
        self.event_log.log(EventType.JAIL_RELEASE, player_id=player.id, method=reason)
