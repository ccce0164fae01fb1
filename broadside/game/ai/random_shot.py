"""Easy AI: uniform random shots."""

from __future__ import annotations

import random

from broadside.game.ai.memory import AIMemory
from broadside.game.ai.strategy import TargetingStrategy
from broadside.game.ai.targeting import available_cells
from broadside.game.core.board import Board
from broadside.game.core.models import Coord


class RandomShotStrategy(TargetingStrategy):
    """Pick any valid cell; pending leads are ignored."""

    def choose_move(self, board: Board, memory: AIMemory, rng: random.Random) -> Coord | None:
        available = available_cells(board, memory.fired)
        if not available:
            return None
        return rng.choice(available)
