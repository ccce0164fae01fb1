"""Board state representation and copy-on-write placement helpers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

import numpy as np

from broadside.game.core.errors import InvalidBoardSizeError
from broadside.game.core.models import BOARD_SIZE, Cell, CellStatus, Coord, Ship

NO_SHIP = -1


@dataclass(frozen=True, slots=True, eq=False)
class Board:
    """Immutable numpy-backed board.

    ``status`` holds ``CellStatus`` codes and ``owner`` holds the index of the
    owning ship in ``ships`` (``NO_SHIP`` when empty). Both grids are indexed
    ``[y, x]`` and are read-only once owned by a board; every update goes
    through a copy.
    """

    size: int
    status: np.ndarray
    owner: np.ndarray
    ships: tuple[Ship, ...] = field(default=())

    def __post_init__(self) -> None:
        for grid in (self.status, self.owner):
            if grid.shape != (self.size, self.size):
                raise ValueError(f"Grid shape {grid.shape} does not match board size {self.size}.")
            grid.flags.writeable = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.size == other.size
            and self.ships == other.ships
            and np.array_equal(self.status, other.status)
            and np.array_equal(self.owner, other.owner)
        )

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in board bounds."""
        return 0 <= coord.x < self.size and 0 <= coord.y < self.size

    def status_at(self, coord: Coord) -> CellStatus:
        return CellStatus(int(self.status[coord.y, coord.x]))

    def ship_at(self, coord: Coord) -> Ship | None:
        """Return the ship occupying ``coord``, if any."""
        index = int(self.owner[coord.y, coord.x])
        if index == NO_SHIP:
            return None
        return self.ships[index]

    def ship_by_id(self, ship_id: str) -> Ship | None:
        for ship in self.ships:
            if ship.id == ship_id:
                return ship
        return None

    def cell(self, coord: Coord) -> Cell:
        ship = self.ship_at(coord)
        return Cell(coord=coord, status=self.status_at(coord), ship_id=ship.id if ship else None)

    def coords(self) -> Iterator[Coord]:
        """Iterate all coordinates row by row."""
        for y in range(self.size):
            for x in range(self.size):
                yield Coord(x, y)

    def rows(self) -> list[list[Cell]]:
        """Return the full grid as cell views, outer list indexed by row."""
        return [[self.cell(Coord(x, y)) for x in range(self.size)] for y in range(self.size)]


def create_empty_board(size: int = BOARD_SIZE) -> Board:
    """Create a board with every cell empty and no ships."""
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise InvalidBoardSizeError(size)
    return Board(
        size=size,
        status=np.full((size, size), CellStatus.EMPTY, dtype=np.int8),
        owner=np.full((size, size), NO_SHIP, dtype=np.int16),
    )


def can_place_ship_at(board: Board, coordinates: Iterable[Coord]) -> bool:
    """Return whether every coordinate is in bounds and currently empty."""
    for coord in coordinates:
        if not board.in_bounds(coord):
            return False
        if board.status_at(coord) is not CellStatus.EMPTY:
            return False
    return True


def place_ship_at(board: Board, ship: Ship, coordinates: Iterable[Coord]) -> Board:
    """Return a new board with ``ship`` placed on ``coordinates``.

    Placement is not re-validated; guard calls with ``can_place_ship_at``.
    """
    cells = tuple(coordinates)
    status = board.status.copy()
    owner = board.owner.copy()
    index = len(board.ships)
    for coord in cells:
        status[coord.y, coord.x] = CellStatus.SHIP
        owner[coord.y, coord.x] = index
    return Board(
        size=board.size,
        status=status,
        owner=owner,
        ships=(*board.ships, ship.placed_at(cells)),
    )
