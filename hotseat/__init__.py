"""
Hot-seat Monopoly engine

Turn sequencing, tile resolution and standings for a local multi-player
Monopoly variant whose board and scoreboard live on a remote service.
"""

from .api import ScoreService
from .board import Board
from .config import GameConfig
from .dice import Dice, DiceRoll
from .game import Game, GamePhase, create_game
from .money import Bank
from .player import Player
from .rules import Rules, Standing
from .turns import TurnManager

__all__ = [
    "ScoreService",
    "Board",
    "GameConfig",
    "Dice",
    "DiceRoll",
    "Game",
    "GamePhase",
    "create_game",
    "Bank",
    "Player",
    "Rules",
    "Standing",
    "TurnManager",
]
