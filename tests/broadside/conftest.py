from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterator

import pytest

from broadside.game.ai.memory import AIMemory, create_initial_memory, update_memory_after_shot
from broadside.game.core.board import Board
from broadside.game.core.models import Coord
from broadside.game.infra.logging import shutdown_logging
from tests.broadside.helpers import HIT_COORD, attack_all, board_with_ships


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def wounded_board() -> Board:
    """5x5 board, one 3-long ship at (2,2)-(4,2) hit once at (2,2)."""
    board = board_with_ships(5, [("ship1", [Coord(2, 2), Coord(3, 2), Coord(4, 2)])])
    return attack_all(board, [HIT_COORD])


@pytest.fixture
def memory_after_hit(wounded_board: Board) -> AIMemory:
    return update_memory_after_shot(create_initial_memory(), HIT_COORD, True, wounded_board)


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    shutdown_logging()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def clear_env(monkeypatch) -> Callable[..., None]:
    """Unset variables so that anything written to os.environ is undone after the test."""

    def _clear(*names: str) -> None:
        for name in names:
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)

    return _clear
