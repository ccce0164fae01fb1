"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum, StrEnum

BOARD_SIZE = 10


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class CellStatus(IntEnum):
    """Status of a single board cell.

    Values double as the int8 codes stored in the board status grid.
    """

    EMPTY = 0
    SHIP = 1
    HIT = 2
    MISS = 3

    @property
    def resolved(self) -> bool:
        return self in (CellStatus.HIT, CellStatus.MISS)


class ShipType(StrEnum):
    """Classic Battleship ship types."""

    CARRIER = "CARRIER"
    BATTLESHIP = "BATTLESHIP"
    CRUISER = "CRUISER"
    SUBMARINE = "SUBMARINE"
    DESTROYER = "DESTROYER"

    @property
    def size(self) -> int:
        return SHIP_LENGTHS[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


SHIP_LENGTHS: dict[ShipType, int] = {
    ShipType.CARRIER: 5,
    ShipType.BATTLESHIP: 4,
    ShipType.CRUISER: 3,
    ShipType.SUBMARINE: 3,
    ShipType.DESTROYER: 2,
}

DEFAULT_FLEET: tuple[ShipType, ...] = (
    ShipType.CARRIER,
    ShipType.BATTLESHIP,
    ShipType.CRUISER,
    ShipType.SUBMARINE,
    ShipType.DESTROYER,
)


class ShotResult(StrEnum):
    """Result of a single shot."""

    MISS = "MISS"
    HIT = "HIT"
    SUNK = "SUNK"
    REPEAT = "REPEAT"
    INVALID = "INVALID"


class Turn(StrEnum):
    """Current turn owner."""

    HUMAN = "HUMAN"
    AI = "AI"


class GamePhase(StrEnum):
    """Lifecycle phase of one game."""

    PLACING = "PLACING"
    PLAYING = "PLAYING"
    FINISHED = "FINISHED"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate. ``x`` is the column, ``y`` the row."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Cell:
    """Read-only view of one board position."""

    coord: Coord
    status: CellStatus
    ship_id: str | None = None


@dataclass(frozen=True, slots=True)
class Ship:
    """A ship and its damage bookkeeping."""

    id: str
    name: str
    length: int
    coordinates: tuple[Coord, ...] = ()
    hits: int = 0

    @property
    def is_sunk(self) -> bool:
        return self.hits >= self.length

    @property
    def is_placed(self) -> bool:
        return bool(self.coordinates)

    def placed_at(self, coordinates: tuple[Coord, ...] | list[Coord]) -> Ship:
        """Return a copy of this ship occupying ``coordinates``."""
        return replace(self, coordinates=tuple(coordinates))

    def with_hit(self) -> Ship:
        """Return a copy with one more hit registered."""
        return replace(self, hits=self.hits + 1)

    @classmethod
    def from_type(cls, ship_type: ShipType) -> Ship:
        return cls(id=ship_type.value.lower(), name=ship_type.display_name, length=ship_type.size)


def build_fleet(ship_types: tuple[ShipType, ...] = DEFAULT_FLEET) -> list[Ship]:
    """Create fresh, unplaced ships for the given fleet."""
    return [Ship.from_type(ship_type) for ship_type in ship_types]


def cells_for_placement(anchor: Coord, length: int, orientation: Orientation) -> list[Coord]:
    """Compute occupied cells for a ship anchored at its top-left cell."""
    result: list[Coord] = []
    for i in range(length):
        if orientation is Orientation.HORIZONTAL:
            result.append(Coord(anchor.x + i, anchor.y))
        else:
            result.append(Coord(anchor.x, anchor.y + i))
    return result
