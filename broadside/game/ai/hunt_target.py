"""Medium AI: hunt/target over the memory's hunt queue."""

from __future__ import annotations

import random

from broadside.game.ai.memory import AIMemory
from broadside.game.ai.random_shot import RandomShotStrategy
from broadside.game.ai.strategy import TargetingStrategy
from broadside.game.ai.targeting import adjacent_cells, is_valid_target
from broadside.game.core.board import Board
from broadside.game.core.models import Coord


class HuntTargetStrategy(TargetingStrategy):
    """Work through queued leads, then neighbours of the hit streak, then random."""

    def __init__(self) -> None:
        self._fallback = RandomShotStrategy()

    def choose_move(self, board: Board, memory: AIMemory, rng: random.Random) -> Coord | None:
        for coord in memory.hunt_queue:
            if is_valid_target(board, coord, memory.fired):
                return coord

        # Queue ran dry while a ship is still wounded: rebuild leads from the streak.
        rebuilt = self._streak_neighbours(board, memory)
        if rebuilt:
            return rebuilt[0]

        return self._fallback.choose_move(board, memory, rng)

    @staticmethod
    def _streak_neighbours(board: Board, memory: AIMemory) -> list[Coord]:
        seen: set[Coord] = set()
        result: list[Coord] = []
        for hit in memory.hit_streak:
            for coord in adjacent_cells(hit):
                if coord in seen or not is_valid_target(board, coord, memory.fired):
                    continue
                seen.add(coord)
                result.append(coord)
        return result
