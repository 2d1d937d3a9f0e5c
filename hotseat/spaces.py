"""
Board tile definitions and types.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from hotseat.config import DEFAULT_RAIL_RENT


class TileType(str, Enum):
    """Types of tiles on the board."""

    GO = "go"
    JAIL = "jail"
    FREE = "free"
    GO_TO_JAIL = "go_to_jail"
    TAX = "tax"
    CHANCE = "chance"
    COMMUNITY = "community"
    PROPERTY = "property"
    RAILROAD = "railroad"
    UTILITY = "utility"
    SPECIAL = "special"


OWNABLE_TYPES = (TileType.PROPERTY, TileType.RAILROAD, TileType.UTILITY)


@dataclass
class RentTable:
    """Rent structure of an ownable tile."""

    base: int = 0
    with_house: List[int] = field(default_factory=list)
    with_hotel: int = 0
    rail: Optional[List[int]] = None

    def for_houses(self, houses: int) -> int:
        """Rent with 1-4 houses; missing entries count as zero."""
        if 1 <= houses <= len(self.with_house):
            return self.with_house[houses - 1]
        return 0

    def for_railroads(self, railroads_owned: int) -> int:
        """Rent tier for an owner holding the given number of railroads."""
        table = self.rail or list(DEFAULT_RAIL_RENT)
        if railroads_owned <= 0:
            return 0
        return table[min(railroads_owned, len(table)) - 1]


@dataclass
class Ownable:
    """Ownership and economic state of a purchasable tile."""

    price: int
    rent: RentTable
    mortgage: int = 0
    owner_id: Optional[int] = None
    mortgaged: bool = False
    houses: int = 0
    hotel: bool = False

    def __post_init__(self) -> None:
        if self.mortgage == 0:
            self.mortgage = self.price // 2

    def is_owned(self) -> bool:
        """Check if the tile is owned by any player."""
        return self.owner_id is not None


@dataclass
class Tile:
    """
    A single board cell.

    Purchasable tiles (property, railroad, utility) carry an ``Ownable``;
    every other tile has ``economics=None``.
    """

    id: int
    name: str
    type: TileType
    value: int = 0
    color: Optional[str] = None
    economics: Optional[Ownable] = None

    @property
    def is_ownable(self) -> bool:
        return self.economics is not None

    @property
    def owner_id(self) -> Optional[int]:
        return self.economics.owner_id if self.economics else None

    def get_rent(self) -> int:
        """
        Rent for this tile ignoring who owns it.

        Streets follow hotel > houses > base. Railroads return their first
        tier; the owner-dependent tier is computed by the rules engine.
        """
        econ = self.economics
        if econ is None or econ.mortgaged:
            return 0
        if self.type == TileType.RAILROAD:
            return econ.rent.for_railroads(1) if econ.rent.rail else econ.rent.base
        if econ.hotel:
            return econ.rent.with_hotel
        if econ.houses >= 1:
            return econ.rent.for_houses(econ.houses)
        return econ.rent.base

    def __repr__(self) -> str:
        return f"Tile(id={self.id}, name='{self.name}', type={self.type.value})"
