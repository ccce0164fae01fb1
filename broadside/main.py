"""Headless entry point: let an AI difficulty play out games against random fleets."""

from __future__ import annotations

import argparse
import logging
import random
import statistics
from collections.abc import Sequence

from broadside.game.ai.difficulty import DIFFICULTIES, Difficulty, choose_move_for_difficulty
from broadside.game.ai.memory import create_initial_memory, update_memory_after_shot
from broadside.game.core.fleet import random_fleet_board
from broadside.game.core.shot_resolution import all_ships_sunk, receive_attack
from broadside.game.infra.config import GameConfig, load_default_env_files, load_game_config
from broadside.game.infra.logging import build_logging_config, configure_logging, shutdown_logging

logger = logging.getLogger(__name__)


def simulate_game(difficulty: Difficulty, rng: random.Random, size: int) -> int:
    """Fire at a randomly placed default fleet until it sinks; return shots taken."""
    board = random_fleet_board(rng, size)
    memory = create_initial_memory()
    shots = 0
    while not all_ships_sunk(board):
        target = choose_move_for_difficulty(board, memory, difficulty, rng)
        if target is None:
            logger.warning("simulation_stalled difficulty=%s shots=%d", difficulty, shots)
            break
        outcome = receive_attack(board, target)
        memory = update_memory_after_shot(memory, target, outcome.hit, outcome.board, outcome.sunk_ship)
        board = outcome.board
        shots += 1
    return shots


def _parse_args(argv: Sequence[str] | None, defaults: GameConfig) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate AI games against random fleets.")
    parser.add_argument(
        "--difficulty",
        choices=[item.value for item in DIFFICULTIES],
        default=defaults.difficulty.value,
    )
    parser.add_argument("--seed", type=int, default=defaults.seed)
    parser.add_argument("--size", type=int, default=defaults.board_size)
    parser.add_argument("--games", type=int, default=1)
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulation CLI."""
    load_default_env_files()
    configure_logging(build_logging_config())
    try:
        args = _parse_args(argv, load_game_config())
        difficulty = Difficulty(args.difficulty)
        rng = random.Random(args.seed)
        results: list[int] = []
        for index in range(1, args.games + 1):
            shots = simulate_game(difficulty, rng, args.size)
            results.append(shots)
            logger.info("game_finished index=%d difficulty=%s shots=%d", index, difficulty, shots)
        if results:
            logger.info(
                "simulation_summary games=%d difficulty=%s mean_shots=%.2f",
                len(results),
                difficulty,
                statistics.fmean(results),
            )
    except Exception:
        logger.exception("simulation_failed")
        raise
    finally:
        shutdown_logging()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
