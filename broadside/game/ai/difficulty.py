"""Difficulty selection and move dispatch."""

from __future__ import annotations

import logging
import random
from enum import StrEnum

from broadside.game.ai.hunt_target import HuntTargetStrategy
from broadside.game.ai.memory import AIMemory
from broadside.game.ai.probability_target import ProbabilityTargetStrategy
from broadside.game.ai.random_shot import RandomShotStrategy
from broadside.game.ai.strategy import TargetingStrategy
from broadside.game.core.board import Board
from broadside.game.core.models import Coord

logger = logging.getLogger(__name__)


class Difficulty(StrEnum):
    """AI difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


DIFFICULTIES: tuple[Difficulty, ...] = (Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD)


def resolve_difficulty(value: str | Difficulty) -> Difficulty:
    """Map user input to a difficulty, defaulting to easy for unknown values."""
    try:
        return Difficulty(str(value).strip().lower())
    except ValueError:
        logger.warning("unknown_difficulty value=%r fallback=%s", value, Difficulty.EASY.value)
        return Difficulty.EASY


def build_strategy(difficulty: str | Difficulty) -> TargetingStrategy:
    """Construct the targeting strategy for a difficulty."""
    selected = resolve_difficulty(difficulty)
    if selected is Difficulty.MEDIUM:
        return HuntTargetStrategy()
    if selected is Difficulty.HARD:
        return ProbabilityTargetStrategy()
    return RandomShotStrategy()


def choose_move_for_difficulty(
    board: Board,
    memory: AIMemory,
    difficulty: str | Difficulty,
    rng: random.Random,
) -> Coord | None:
    """Pick the AI's next target on ``board``; ``None`` means no valid cell remains."""
    target = build_strategy(difficulty).choose_move(board, memory, rng)
    logger.debug(
        "ai_move difficulty=%s target=%s hunt_queue=%d hit_streak=%d shots=%d",
        difficulty,
        target,
        len(memory.hunt_queue),
        len(memory.hit_streak),
        len(memory.shot_history),
    )
    return target
