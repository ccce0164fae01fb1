"""Target validity rules shared by every strategy."""

from __future__ import annotations

from collections.abc import Collection

from broadside.game.core.board import Board
from broadside.game.core.models import Coord


def is_valid_target(board: Board, coord: Coord, fired: Collection[Coord]) -> bool:
    """In bounds, not yet hit or missed, and not already fired at."""
    if not board.in_bounds(coord):
        return False
    if board.status_at(coord).resolved:
        return False
    return coord not in fired


def available_cells(board: Board, fired: Collection[Coord]) -> list[Coord]:
    """Return every valid target, row by row."""
    return [coord for coord in board.coords() if is_valid_target(board, coord, fired)]


def adjacent_cells(coord: Coord) -> list[Coord]:
    """Orthogonal neighbours in up, down, left, right order (may be out of bounds)."""
    return [
        Coord(coord.x, coord.y - 1),
        Coord(coord.x, coord.y + 1),
        Coord(coord.x - 1, coord.y),
        Coord(coord.x + 1, coord.y),
    ]
