"""Probability-density AI and the heat map it is driven by."""

from __future__ import annotations

import random
from dataclasses import dataclass

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from broadside.game.ai.memory import AIMemory
from broadside.game.ai.random_shot import RandomShotStrategy
from broadside.game.ai.strategy import TargetingStrategy
from broadside.game.ai.targeting import adjacent_cells, available_cells, is_valid_target
from broadside.game.core.board import Board
from broadside.game.core.models import CellStatus, Coord
from broadside.game.core.shot_resolution import remaining_ships

# Cells next to a wounded ship become ``heat * BOOST_FACTOR + BOOST_OFFSET``.
BOOST_FACTOR = 4
BOOST_OFFSET = 1


@dataclass(frozen=True, slots=True, eq=False)
class HeatMap:
    """Per-cell count of ship placements consistent with the board."""

    grid: np.ndarray
    max: int

    def heat_at(self, coord: Coord) -> int:
        return int(self.grid[coord.y, coord.x])

    def to_rows(self) -> list[list[int]]:
        return self.grid.tolist()


def compute_probability_heatmap(board: Board, memory: AIMemory) -> HeatMap:
    """Build the heat map for ``board`` as the AI currently knows it.

    Every horizontal or vertical run free of misses counts once per remaining
    ship of that length, adding one to each unresolved cell it covers. Valid
    neighbours of hits on unsunk ships are then boosted, once per such hit.
    """
    size = board.size
    grid = np.zeros((size, size), dtype=np.int64)
    lengths = [ship.length for ship in remaining_ships(board)]
    if not lengths:
        grid.flags.writeable = False
        return HeatMap(grid=grid, max=0)

    miss = board.status == CellStatus.MISS
    unresolved = ~(miss | (board.status == CellStatus.HIT))
    for length in lengths:
        if length > size:
            continue
        _accumulate_runs(grid, miss, unresolved, length)
        _accumulate_runs(grid.T, miss.T, unresolved.T, length)

    for hit in _unfinished_hits(board):
        for coord in adjacent_cells(hit):
            if is_valid_target(board, coord, memory.fired):
                grid[coord.y, coord.x] = grid[coord.y, coord.x] * BOOST_FACTOR + BOOST_OFFSET

    grid.flags.writeable = False
    return HeatMap(grid=grid, max=int(grid.max()))


class ProbabilityTargetStrategy(TargetingStrategy):
    """Hard AI that fires at the hottest valid cell."""

    def __init__(self) -> None:
        self._fallback = RandomShotStrategy()

    def choose_move(self, board: Board, memory: AIMemory, rng: random.Random) -> Coord | None:
        heat = compute_probability_heatmap(board, memory)
        if heat.max <= 0:
            return self._fallback.choose_move(board, memory, rng)

        candidates = [
            coord for coord in available_cells(board, memory.fired) if heat.heat_at(coord) == heat.max
        ]
        if not candidates:
            return self._fallback.choose_move(board, memory, rng)
        return rng.choice(candidates)


def _accumulate_runs(grid: np.ndarray, miss: np.ndarray, unresolved: np.ndarray, length: int) -> None:
    """Add horizontal runs of ``length`` into ``grid`` (pass transposes for vertical)."""
    fits = ~sliding_window_view(miss, length, axis=1).any(axis=-1)
    width = fits.shape[1]
    for offset in range(length):
        grid[:, offset : offset + width] += fits & unresolved[:, offset : offset + width]


def _unfinished_hits(board: Board) -> list[Coord]:
    hits: list[Coord] = []
    for y, x in np.argwhere(board.status == CellStatus.HIT):
        coord = Coord(int(x), int(y))
        ship = board.ship_at(coord)
        if ship is not None and not ship.is_sunk:
            hits.append(coord)
    return hits
