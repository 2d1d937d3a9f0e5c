"""
Board loading and circular navigation.

The configuration service delivers the board as four bands
(``bottom``, ``left``, ``top``, ``right``). Loading flattens them into a
single list ordered by tile id and classifies each raw record.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from hotseat.config import (
    DEFAULT_RAIL_RENT,
    DEFAULT_RAILROAD_PRICE,
    DEFAULT_TAX_AMOUNT,
    DEFAULT_UTILITY_PRICE,
)
from hotseat.exceptions import ConfigurationError
from hotseat.spaces import Ownable, RentTable, Tile, TileType

logger = logging.getLogger(__name__)

BANDS = ("bottom", "left", "top", "right")

# Fixed corners of the classic layout
CORNER_TYPES = {
    0: TileType.GO,
    10: TileType.JAIL,
    20: TileType.FREE,
    30: TileType.GO_TO_JAIL,
}

_TYPE_ALIASES = {
    "community_chest": TileType.COMMUNITY,
    "free_parking": TileType.FREE,
}


def flatten_board(data: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Join the four bands and sort by ascending id (missing ids sort as 0)."""
    records: List[Dict[str, Any]] = []
    for band in BANDS:
        items = data.get(band)
        if isinstance(items, list):
            records.extend(items)
    return sorted(records, key=lambda r: r.get("id") or 0)


def normalize_type(raw_type: Optional[str]) -> TileType:
    """Map the service's type names onto ``TileType``. Unknown names become special."""
    if raw_type in _TYPE_ALIASES:
        return _TYPE_ALIASES[raw_type]
    try:
        return TileType(raw_type)
    except ValueError:
        return TileType.SPECIAL


def _number(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _action_money(raw: Mapping[str, Any], default: int) -> int:
    action = raw.get("action")
    if isinstance(action, dict) and action.get("money") is not None:
        return _number(action["money"], default)
    return default


def _price(raw: Mapping[str, Any]) -> int:
    for key in ("price", "cost", "purchasable_price"):
        if raw.get(key) is not None:
            return _number(raw[key])
    return 0


def _base_rent(raw: Mapping[str, Any]) -> int:
    if raw.get("baseRent") is not None:
        return _number(raw["baseRent"])
    if raw.get("base_rent") is not None:
        return _number(raw["base_rent"])
    rent = raw.get("rent")
    if isinstance(rent, list):
        return _number(rent[0]) if rent else 0
    if isinstance(rent, dict):
        return _number(rent.get("1", rent.get("base", 0)))
    if isinstance(rent, (int, float)):
        return int(rent)
    return 0


def _rail_table(raw: Mapping[str, Any]) -> List[int]:
    rent = raw.get("rent")
    if isinstance(rent, list) and rent:
        return [_number(n) for n in rent]
    if isinstance(rent, dict) and any(str(k) in rent for k in range(1, 5)):
        return [_number(rent.get(str(k), 0)) for k in range(1, 5)]
    return list(DEFAULT_RAIL_RENT)


def _ownership(raw: Mapping[str, Any]) -> Dict[str, Any]:
    owner = raw.get("ownerId", raw.get("owner"))
    return {
        "owner_id": owner,
        "mortgaged": bool(raw.get("mortgaged", False)),
        "mortgage": _number(raw.get("mortgage"), 0),
    }


def _build_property(raw: Mapping[str, Any], tile_id: int, name: str) -> Tile:
    price = _price(raw)
    rent = raw.get("rent") if isinstance(raw.get("rent"), dict) else {}
    table = RentTable(
        base=_base_rent(raw),
        with_house=[_number(n) for n in rent.get("withHouse", [])],
        with_hotel=_number(rent.get("withHotel", 0)),
    )
    hotel = bool(raw.get("hotel", False))
    # A hotel replaces the houses; a street never holds more than 4
    houses = 0 if hotel else min(max(_number(raw.get("houses"), 0), 0), 4)
    econ = Ownable(
        price=price,
        rent=table,
        houses=houses,
        hotel=hotel,
        **_ownership(raw),
    )
    return Tile(
        tile_id,
        name,
        TileType.PROPERTY,
        color=raw.get("color") or raw.get("group"),
        economics=econ,
    )


def _build_railroad(raw: Mapping[str, Any], tile_id: int, name: str) -> Tile:
    rail = _rail_table(raw)
    base = _base_rent(raw) or rail[0] or DEFAULT_RAIL_RENT[0]
    econ = Ownable(
        price=_price(raw) or DEFAULT_RAILROAD_PRICE,
        rent=RentTable(base=base, rail=rail),
        **_ownership(raw),
    )
    return Tile(tile_id, name, TileType.RAILROAD, economics=econ)


def _build_utility(raw: Mapping[str, Any], tile_id: int, name: str) -> Tile:
    econ = Ownable(
        price=_price(raw) or DEFAULT_UTILITY_PRICE,
        rent=RentTable(base=_base_rent(raw)),
        **_ownership(raw),
    )
    return Tile(tile_id, name, TileType.UTILITY, economics=econ)


def build_tile(raw: Mapping[str, Any]) -> Tile:
    """Classify one raw record into a ``Tile``."""
    tile_id = _number(raw.get("id"), 0)
    name = str(raw.get("name", ""))
    tile_type = normalize_type(raw.get("type"))

    if tile_type == TileType.SPECIAL:
        corner = CORNER_TYPES.get(tile_id)
        if corner == TileType.GO:
            return Tile(tile_id, name, TileType.GO, value=_action_money(raw, 200))
        if corner is not None:
            return Tile(tile_id, name, corner)
        return Tile(tile_id, name, TileType.SPECIAL)

    if tile_type == TileType.PROPERTY:
        return _build_property(raw, tile_id, name)
    if tile_type == TileType.RAILROAD:
        return _build_railroad(raw, tile_id, name)
    if tile_type == TileType.UTILITY:
        return _build_utility(raw, tile_id, name)
    if tile_type == TileType.TAX:
        # Magnitude only; the debit is applied at resolution
        return Tile(tile_id, name, TileType.TAX, value=_action_money(raw, DEFAULT_TAX_AMOUNT))
    if tile_type == TileType.GO:
        return Tile(tile_id, name, TileType.GO, value=_action_money(raw, 200))
    return Tile(tile_id, name, tile_type)


class Board:
    """The game board: a circular sequence of tiles fetched from the service."""

    def __init__(self, api: Any):
        self.api = api
        self.tiles: List[Tile] = []

    async def load(self) -> None:
        """
        Fetch the board configuration and build the tiles.

        Raises:
            ConfigurationError: If the service returned no tiles.
        """
        data = await self.api.fetch_board()
        flat = flatten_board(data or {})
        if not flat:
            raise ConfigurationError("Board service returned no tiles")
        self.tiles = [build_tile(raw) for raw in flat]
        if len(self.tiles) != 40:
            logger.warning(f"Board loaded with {len(self.tiles)} tiles, expected 40")

    def _require_loaded(self) -> None:
        if not self.tiles:
            raise ConfigurationError("Board has not been loaded")

    def size(self) -> int:
        """Number of tiles on the board."""
        self._require_loaded()
        return len(self.tiles)

    def get_tile(self, index: int) -> Tile:
        """Get the tile at the given index, wrapping around the board."""
        return self.tiles[index % self.size()]

    def advance(self, start: int, steps: int) -> int:
        """Position reached after moving ``steps`` tiles from ``start``."""
        return (start + steps) % self.size()

    def ownable_tiles(self) -> List[Tile]:
        return [t for t in self.tiles if t.is_ownable]

    def tiles_of_color(self, color: Optional[str]) -> List[Tile]:
        """All street tiles in a color group."""
        return [t for t in self.tiles if t.type == TileType.PROPERTY and t.color == color]

    def count_owned(self, owner_id: int, tile_type: TileType) -> int:
        """How many tiles of a type the owner holds."""
        return sum(1 for t in self.tiles if t.type == tile_type and t.owner_id == owner_id)

    def find_first(self, tile_type: TileType) -> Optional[Tile]:
        for tile in self.tiles:
            if tile.type == tile_type:
                return tile
        return None
