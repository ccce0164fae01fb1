import random

import pytest

from broadside.game.ai.difficulty import Difficulty, choose_move_for_difficulty
from broadside.game.ai.memory import create_initial_memory, update_memory_after_shot
from broadside.game.core.fleet import random_fleet_board
from broadside.game.core.models import Coord, GamePhase
from broadside.game.core.rules import create_session, player_fire
from broadside.game.core.shot_resolution import all_ships_sunk, receive_attack
from broadside.main import simulate_game


@pytest.mark.parametrize("difficulty", list(Difficulty))
@pytest.mark.parametrize("seed", [1, 2, 3])
def test_ai_never_repeats_a_shot_over_a_full_game(difficulty: Difficulty, seed: int) -> None:
    rng = random.Random(seed)
    board = random_fleet_board(rng, 10)
    memory = create_initial_memory()
    while not all_ships_sunk(board):
        target = choose_move_for_difficulty(board, memory, difficulty, rng)
        assert target is not None
        outcome = receive_attack(board, target)
        assert outcome.changed
        memory = update_memory_after_shot(memory, target, outcome.hit, outcome.board, outcome.sunk_ship)
        board = outcome.board

    assert len(memory.shot_history) == len(set(memory.shot_history))
    assert 17 <= len(memory.shot_history) <= 100
    assert memory.hit_streak == ()


def test_smarter_strategies_need_fewer_shots() -> None:
    def mean_shots(difficulty: Difficulty) -> float:
        rng = random.Random(2024)
        return sum(simulate_game(difficulty, rng, 10) for _ in range(8)) / 8

    assert mean_shots(Difficulty.HARD) < mean_shots(Difficulty.EASY)
    assert mean_shots(Difficulty.MEDIUM) < mean_shots(Difficulty.EASY)


@pytest.mark.parametrize("difficulty", ["easy", "medium", "hard"])
def test_session_plays_to_a_winner(difficulty: str) -> None:
    rng = random.Random(11)
    session = create_session(difficulty, rng)
    targets = [Coord(x, y) for y in range(10) for x in range(10)]
    for target in targets:
        if session.phase is GamePhase.FINISHED:
            break
        session = player_fire(session, target, rng).session

    assert session.phase is GamePhase.FINISHED
    assert session.winner is not None
    history = session.ai_memory.shot_history
    assert len(history) == len(set(history))
