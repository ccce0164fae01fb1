"""AI strategy interface."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod

from broadside.game.ai.memory import AIMemory
from broadside.game.core.board import Board
from broadside.game.core.models import Coord


class TargetingStrategy(ABC):
    """Stateless shot selection over the opponent board and AI memory."""

    @abstractmethod
    def choose_move(self, board: Board, memory: AIMemory, rng: random.Random) -> Coord | None:
        """Return next coordinate to fire, or ``None`` when nothing is left."""
