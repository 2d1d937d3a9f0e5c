"""Headless UI that decides automatically with a greedy strategy."""

import logging
from typing import TYPE_CHECKING, List, Optional

from hotseat.ui.base import GameUI, ManageAction, ManageRequest, PurchaseRequest

if TYPE_CHECKING:
    from hotseat.board import Board
    from hotseat.game import Game
    from hotseat.player import Player
    from hotseat.rules import Standing

logger = logging.getLogger(__name__)


class AutopilotUI(GameUI):
    """
    Greedy stand-in for a human at the table.

    Buys anything costing at most ``max_price_ratio`` of current cash,
    prefers hotels over houses over redeeming, and only mortgages once the
    player is in debt. Every notification is kept in ``messages`` so
    simulations and tests can inspect what a person would have seen.
    """

    # Priority order when several management actions are available
    PRIORITY = [
        ManageAction.BUILD_HOTEL,
        ManageAction.BUILD_HOUSE,
        ManageAction.REDEEM,
    ]

    def __init__(self, max_price_ratio: float = 0.4):
        self.max_price_ratio = max_price_ratio
        self.game: Optional["Game"] = None
        self.messages: List[str] = []
        self.standings: Optional[List["Standing"]] = None
        self.refresh_count = 0
        self.token_renders = 0

    def mount(self, game: "Game") -> None:
        self.game = game

    def render_board(self, board: "Board") -> None:
        logger.debug(f"Board with {board.size()} tiles")

    def render_players(self, players: List["Player"]) -> None:
        pass

    def render_tokens(self, players: List["Player"]) -> None:
        self.token_renders += 1

    def refresh(self) -> None:
        self.refresh_count += 1

    async def decide_purchase(self, request: PurchaseRequest) -> bool:
        cash = request.player.money
        if cash <= 0:
            return False
        return request.price / cash <= self.max_price_ratio

    async def decide_management(self, request: ManageRequest) -> Optional[ManageAction]:
        if request.player.money < 0 and ManageAction.MORTGAGE in request.available:
            return ManageAction.MORTGAGE
        for action in self.PRIORITY:
            if action in request.available:
                return action
        return None

    def show_standings(self, standings: List["Standing"]) -> None:
        self.standings = list(standings)

    def toast(self, message: str) -> None:
        self.messages.append(message)
        logger.info(message)
