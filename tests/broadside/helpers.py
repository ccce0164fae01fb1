"""Shared builders for board and AI tests."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

from broadside.game.core.board import Board, create_empty_board, place_ship_at
from broadside.game.core.models import Coord, Ship
from broadside.game.core.shot_resolution import receive_attack

T = TypeVar("T")

HIT_COORD = Coord(2, 2)


class FirstChoiceRandom(random.Random):
    """Always picks the first element offered to ``choice``."""

    def choice(self, seq: Sequence[T]) -> T:
        return seq[0]


class LastChoiceRandom(random.Random):
    """Always picks the last element offered to ``choice``."""

    def choice(self, seq: Sequence[T]) -> T:
        return seq[-1]


def board_with_ships(size: int, ships: Sequence[tuple[str, Sequence[Coord]]]) -> Board:
    """Place ``(ship_id, cells)`` pairs on an empty board."""
    board = create_empty_board(size)
    for ship_id, cells in ships:
        ship = Ship(id=ship_id, name=f"Ship-{ship_id}", length=len(cells))
        board = place_ship_at(board, ship, cells)
    return board


def attack_all(board: Board, targets: Sequence[Coord]) -> Board:
    for target in targets:
        board = receive_attack(board, target).board
    return board


def is_adjacent(a: Coord, b: Coord) -> bool:
    return abs(a.x - b.x) + abs(a.y - b.y) == 1
