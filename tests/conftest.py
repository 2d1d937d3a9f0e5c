"""Shared test fixtures for hot-seat engine tests."""

from collections import deque
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio

from hotseat import Board, GameConfig, Player, create_game
from hotseat.board import build_tile, flatten_board
from hotseat.exceptions import NetworkError
from hotseat.ui import AutopilotUI, ManageAction


def street(tile_id: int, name: str, color: str, price: int, base: int, **extra: Any) -> Dict[str, Any]:
    houses = [base * 5, base * 15, base * 45, base * 80]
    record = {
        "id": tile_id,
        "name": name,
        "type": "property",
        "color": color,
        "price": price,
        "rent": {"base": base, "withHouse": houses, "withHotel": base * 125},
    }
    record.update(extra)
    return record


def special(tile_id: int, name: str, **extra: Any) -> Dict[str, Any]:
    record = {"id": tile_id, "name": name, "type": "special"}
    record.update(extra)
    return record


def classic_board(overrides: Optional[Dict[int, Dict[str, Any]]] = None) -> Dict[str, List[Dict[str, Any]]]:
    """Classic 40-tile layout in the service's four-band format.

    Records mix the formats the service is known to send (rent lists, keyed
    rent objects, missing prices) and each band is deliberately unsorted.
    """
    tiles = [
        special(0, "GO", action={"money": 200}),
        street(1, "Mediterranean Avenue", "brown", 60, 2),
        {"id": 2, "name": "Community Chest", "type": "community_chest"},
        street(3, "Baltic Avenue", "brown", 60, 4),
        {"id": 4, "name": "Income Tax", "type": "tax", "action": {"money": -200}},
        {"id": 5, "name": "Reading Railroad", "type": "railroad", "price": 200, "rent": [25, 50, 100, 200]},
        street(6, "Oriental Avenue", "light_blue", 100, 6),
        {"id": 7, "name": "Chance", "type": "chance"},
        street(8, "Vermont Avenue", "light_blue", 100, 6),
        street(9, "Connecticut Avenue", "light_blue", 120, 8),
        special(10, "Jail"),
        street(11, "St. Charles Place", "pink", 140, 10),
        {"id": 12, "name": "Electric Company", "type": "utility", "price": 150},
        street(13, "States Avenue", "pink", 140, 10),
        street(14, "Virginia Avenue", "pink", 160, 12),
        {"id": 15, "name": "Pennsylvania Railroad", "type": "railroad",
         "rent": {"1": 25, "2": 50, "3": 100, "4": 200}},
        street(16, "St. James Place", "orange", 180, 14),
        {"id": 17, "name": "Community Chest", "type": "community_chest"},
        street(18, "Tennessee Avenue", "orange", 180, 14),
        street(19, "New York Avenue", "orange", 200, 16),
        special(20, "Free Parking"),
        street(21, "Kentucky Avenue", "red", 220, 18),
        {"id": 22, "name": "Chance", "type": "chance"},
        street(23, "Indiana Avenue", "red", 220, 18),
        street(24, "Illinois Avenue", "red", 240, 20),
        {"id": 25, "name": "B. & O. Railroad", "type": "railroad"},
        street(26, "Atlantic Avenue", "yellow", 260, 22),
        street(27, "Ventnor Avenue", "yellow", 260, 22),
        {"id": 28, "name": "Water Works", "type": "utility", "cost": 150},
        street(29, "Marvin Gardens", "yellow", 280, 24),
        special(30, "Go To Jail"),
        street(31, "Pacific Avenue", "green", 300, 26),
        street(32, "North Carolina Avenue", "green", 300, 26),
        {"id": 33, "name": "Community Chest", "type": "community_chest"},
        street(34, "Pennsylvania Avenue", "green", 320, 28),
        {"id": 35, "name": "Short Line", "type": "railroad", "cost": 200, "rent": [25, 50, 100, 200]},
        {"id": 36, "name": "Chance", "type": "chance"},
        street(37, "Park Place", "dark_blue", 350, 35),
        {"id": 38, "name": "Luxury Tax", "type": "tax", "action": {"money": -100}},
        street(39, "Boardwalk", "dark_blue", 400, 50),
    ]
    for tile_id, record in (overrides or {}).items():
        tiles[tile_id] = record

    bands = {
        "bottom": tiles[0:11],
        "left": tiles[11:21],
        "top": tiles[21:31],
        "right": tiles[31:40],
    }
    return {name: list(reversed(band)) for name, band in bands.items()}


class FakeService:
    """In-memory stand-in for the scoring/configuration service."""

    def __init__(self, board: Optional[Dict[str, Any]] = None, fail_scores: bool = False):
        self.board = board if board is not None else classic_board()
        self.fail_scores = fail_scores
        self.submitted: List[Dict[str, Any]] = []

    async def fetch_board(self) -> Dict[str, Any]:
        return self.board

    async def submit_score(self, nick_name: str, score: int, country_code: Optional[str]) -> Dict[str, Any]:
        if self.fail_scores:
            raise NetworkError("score service unavailable")
        self.submitted.append({"nick_name": nick_name, "score": score, "country_code": country_code})
        return {"ok": True}


class ScriptedUI(AutopilotUI):
    """Autopilot UI whose decisions can be queued by a test."""

    def __init__(self):
        super().__init__()
        self.purchase_answers: deque = deque()
        self.management_answers: deque = deque()
        self.purchase_requests = []
        self.management_requests = []

    async def decide_purchase(self, request):
        self.purchase_requests.append(request)
        if self.purchase_answers:
            return self.purchase_answers.popleft()
        return True

    async def decide_management(self, request) -> Optional[ManageAction]:
        self.management_requests.append(request)
        if self.management_answers:
            return self.management_answers.popleft()
        return None


@pytest.fixture
def game_config():
    """Default game configuration with fixed seed and no movement pacing."""
    return GameConfig(seed=42, step_delay=0)


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def ui():
    return ScriptedUI()


@pytest.fixture
def board(service):
    """A classic board, built from the fake service payload without a fetch."""
    board = Board(service)
    board.tiles = [build_tile(raw) for raw in flatten_board(service.board)]
    return board


@pytest.fixture
def two_players():
    """Two test players."""
    return [Player(1, "Alice", "ES", "#ff0000"), Player(2, "Bob", "MX", "#4caf50")]


@pytest.fixture
def four_players():
    """Four test players."""
    return [
        Player(1, "Alice", "ES"),
        Player(2, "Bob", "MX"),
        Player(3, "Charlie", "US"),
        Player(4, "Diana", "AR"),
    ]


@pytest_asyncio.fixture
async def game(service, ui, two_players, game_config):
    """Initialised two-player game."""
    game = create_game(service, ui, two_players, game_config)
    await game.init()
    return game


def give(tile, player) -> None:
    """Hand a tile to a player without going through a purchase."""
    tile.economics.owner_id = player.id
    player.properties.add(tile.id)


@pytest.fixture
def owned():
    """Fixture form of ``give`` for test modules."""
    return give


@pytest.fixture
def make_service():
    """Build a FakeService, optionally with tile overrides or failing score submission."""

    def _make(overrides: Optional[Dict[int, Dict[str, Any]]] = None, **kwargs: Any) -> FakeService:
        return FakeService(classic_board(overrides), **kwargs)

    return _make
