"""AI targeting engine."""

from broadside.game.ai.difficulty import (
    DIFFICULTIES,
    Difficulty,
    build_strategy,
    choose_move_for_difficulty,
    resolve_difficulty,
)
from broadside.game.ai.memory import AIMemory, Direction, create_initial_memory, update_memory_after_shot
from broadside.game.ai.probability_target import HeatMap, compute_probability_heatmap
from broadside.game.ai.strategy import TargetingStrategy

__all__ = [
    "AIMemory",
    "DIFFICULTIES",
    "Difficulty",
    "Direction",
    "HeatMap",
    "TargetingStrategy",
    "build_strategy",
    "choose_move_for_difficulty",
    "compute_probability_heatmap",
    "create_initial_memory",
    "resolve_difficulty",
    "update_memory_after_shot",
]
