"""
Player state.
"""

from typing import Optional, Set


class Player:
    """Represents the complete state of a player in the game."""

    def __init__(
        self,
        player_id: int,
        nick: str,
        country: Optional[str] = None,
        token_color: Optional[str] = None,
        money: int = 1500,
    ):
        self.id = player_id
        self.nick = nick
        self.country = country
        self.token_color = token_color
        self.money = money
        self.position = 0
        self.properties: Set[int] = set()
        self.in_jail = False
        self.jail_turns = 0

    def pay(self, amount: int) -> None:
        """Debit money. Balances may go negative."""
        self.money -= amount

    def receive(self, amount: int) -> None:
        self.money += amount

    def __repr__(self) -> str:
        return (
            f"Player(id={self.id}, nick='{self.nick}', "
            f"money={self.money}, position={self.position}, in_jail={self.in_jail})"
        )
