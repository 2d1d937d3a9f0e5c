"""Base class for the presentation layer driven by the engine."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from hotseat.board import Board
    from hotseat.game import Game
    from hotseat.player import Player
    from hotseat.rules import Standing
    from hotseat.spaces import Tile


class ManageAction(str, Enum):
    """Actions an owner may take on their own tile."""

    BUILD_HOUSE = "house"
    BUILD_HOTEL = "hotel"
    MORTGAGE = "mortgage"
    REDEEM = "redeem"


@dataclass(frozen=True)
class PurchaseRequest:
    """Offer to buy the unowned tile a player landed on."""

    player: "Player"
    tile: "Tile"
    price: int
    rent: int


@dataclass(frozen=True)
class ManageRequest:
    """Management options for a player standing on their own tile."""

    player: "Player"
    tile: "Tile"
    available: List[ManageAction] = field(default_factory=list)


class GameUI(ABC):
    """
    Abstract collaborator that renders the game and collects decisions.

    Rendering hooks are synchronous. The two decision methods are coroutines:
    the engine awaits them and stays paused until they return, with no
    timeout.
    """

    @abstractmethod
    def mount(self, game: "Game") -> None:
        pass

    @abstractmethod
    def render_board(self, board: "Board") -> None:
        pass

    @abstractmethod
    def render_players(self, players: List["Player"]) -> None:
        pass

    @abstractmethod
    def render_tokens(self, players: List["Player"]) -> None:
        pass

    @abstractmethod
    def refresh(self) -> None:
        """Redraw everything that depends on mutable game state."""
        pass

    @abstractmethod
    async def decide_purchase(self, request: PurchaseRequest) -> bool:
        """
        Ask whether the player buys the tile.

        Args:
            request: Player, tile, price and current rent.

        Returns:
            True to buy, False to decline.
        """
        pass

    @abstractmethod
    async def decide_management(self, request: ManageRequest) -> Optional[ManageAction]:
        """
        Ask which management action to run, if any.

        Args:
            request: Player, tile and the actions currently allowed.

        Returns:
            The chosen action, or None to close without acting.
        """
        pass

    @abstractmethod
    def show_standings(self, standings: List["Standing"]) -> None:
        pass

    @abstractmethod
    def toast(self, message: str) -> None:
        pass

    def notify(self, message: str, title: str = "Notice") -> None:
        """Titled notification; plain UIs fall back to a toast."""
        self.toast(f"{title}: {message}")
