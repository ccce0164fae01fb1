"""Game session state and turn resolution."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from broadside.game.ai.difficulty import Difficulty, choose_move_for_difficulty, resolve_difficulty
from broadside.game.ai.memory import AIMemory, create_initial_memory, update_memory_after_shot
from broadside.game.ai.probability_target import HeatMap, compute_probability_heatmap
from broadside.game.core.board import Board, can_place_ship_at, create_empty_board, place_ship_at
from broadside.game.core.fleet import random_fleet_board
from broadside.game.core.models import (
    BOARD_SIZE,
    Coord,
    GamePhase,
    Orientation,
    Ship,
    Turn,
    build_fleet,
    cells_for_placement,
)
from broadside.game.core.shot_resolution import AttackOutcome, all_ships_sunk, receive_attack

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GameSession:
    """Everything the view layer needs to render one game."""

    player_board: Board
    ai_board: Board
    difficulty: Difficulty = Difficulty.EASY
    current_turn: Turn = Turn.HUMAN
    phase: GamePhase = GamePhase.PLAYING
    winner: Turn | None = None
    turn_count: int = 0
    ai_memory: AIMemory = field(default_factory=AIMemory)
    heatmap: HeatMap | None = None
    placement_index: int | None = None


@dataclass(frozen=True, slots=True)
class TurnReport:
    """Outcome of a full human action (human shot + AI answer)."""

    session: GameSession
    player_outcome: AttackOutcome | None = None
    ai_target: Coord | None = None
    ai_outcome: AttackOutcome | None = None

    @property
    def accepted(self) -> bool:
        return self.player_outcome is not None and self.player_outcome.changed


def create_session(
    difficulty: str | Difficulty,
    rng: random.Random,
    size: int = BOARD_SIZE,
    fleet: Sequence[Ship] | None = None,
) -> GameSession:
    """Start a game with both fleets placed at random."""
    ships = list(fleet) if fleet is not None else build_fleet()
    session = GameSession(
        player_board=random_fleet_board(rng, size, ships),
        ai_board=random_fleet_board(rng, size, ships),
        difficulty=resolve_difficulty(difficulty),
        ai_memory=create_initial_memory(),
    )
    logger.info("session_started difficulty=%s size=%d ships=%d", session.difficulty, size, len(ships))
    return session


def start_manual_placement(difficulty: str | Difficulty, size: int = BOARD_SIZE) -> GameSession:
    """Start a game where the human places ships one by one."""
    empty = create_empty_board(size)
    return GameSession(
        player_board=empty,
        ai_board=empty,
        difficulty=resolve_difficulty(difficulty),
        phase=GamePhase.PLACING,
        placement_index=0,
    )


def next_ship_to_place(session: GameSession, fleet: Sequence[Ship] | None = None) -> Ship | None:
    """Return the ship the human places next, if placement is in progress."""
    if session.phase is not GamePhase.PLACING or session.placement_index is None:
        return None
    ships = list(fleet) if fleet is not None else build_fleet()
    if session.placement_index >= len(ships):
        return None
    return ships[session.placement_index]


def place_player_ship(
    session: GameSession,
    anchor: Coord,
    orientation: Orientation,
    rng: random.Random,
    fleet: Sequence[Ship] | None = None,
) -> GameSession:
    """Place the current ship at ``anchor``; illegal spots leave the session as is.

    Placing the last ship deploys the AI fleet and starts play.
    """
    ships = list(fleet) if fleet is not None else build_fleet()
    ship = next_ship_to_place(session, ships)
    if ship is None or session.placement_index is None:
        return session

    cells = cells_for_placement(anchor, ship.length, orientation)
    if not can_place_ship_at(session.player_board, cells):
        return session

    player_board = place_ship_at(session.player_board, ship, cells)
    next_index = session.placement_index + 1
    if next_index < len(ships):
        return replace(session, player_board=player_board, placement_index=next_index)

    logger.info("manual_placement_complete ships=%d", len(ships))
    return GameSession(
        player_board=player_board,
        ai_board=random_fleet_board(rng, player_board.size, ships),
        difficulty=session.difficulty,
        ai_memory=create_initial_memory(),
    )


def change_difficulty(
    session: GameSession,
    difficulty: str | Difficulty,
    rng: random.Random,
    fleet: Sequence[Ship] | None = None,
) -> GameSession:
    """Switch difficulty; outside placement this starts a fresh game."""
    selected = resolve_difficulty(difficulty)
    if session.phase is GamePhase.PLACING:
        return replace(session, difficulty=selected)
    return create_session(selected, rng, session.player_board.size, fleet)


def player_fire(session: GameSession, target: Coord, rng: random.Random) -> TurnReport:
    """Resolve the human shot at the AI board and the AI's answer in the same turn."""
    if session.phase is not GamePhase.PLAYING or session.current_turn is not Turn.HUMAN:
        return TurnReport(session=session)

    outcome = receive_attack(session.ai_board, target)
    if not outcome.changed:
        return TurnReport(session=session, player_outcome=outcome)

    if all_ships_sunk(outcome.board):
        logger.info("game_over winner=%s turns=%d", Turn.HUMAN, session.turn_count + 1)
        finished = replace(
            session,
            ai_board=outcome.board,
            winner=Turn.HUMAN,
            phase=GamePhase.FINISHED,
            turn_count=session.turn_count + 1,
        )
        return TurnReport(session=finished, player_outcome=outcome)

    after_human = replace(session, ai_board=outcome.board, current_turn=Turn.AI)
    return _run_ai_turn(after_human, outcome, rng)


def _run_ai_turn(session: GameSession, player_outcome: AttackOutcome, rng: random.Random) -> TurnReport:
    ai_target = choose_move_for_difficulty(session.player_board, session.ai_memory, session.difficulty, rng)
    if ai_target is None:
        ai_won = all_ships_sunk(session.player_board)
        logger.info("ai_cannot_move ai_won=%s", ai_won)
        stalled = replace(
            session,
            current_turn=Turn.HUMAN,
            winner=Turn.AI if ai_won else None,
            phase=GamePhase.FINISHED if ai_won else GamePhase.PLAYING,
            turn_count=session.turn_count + 1,
        )
        return TurnReport(session=stalled, player_outcome=player_outcome)

    ai_outcome = receive_attack(session.player_board, ai_target)
    memory = update_memory_after_shot(
        session.ai_memory, ai_target, ai_outcome.hit, ai_outcome.board, ai_outcome.sunk_ship
    )
    heatmap = session.heatmap
    if session.difficulty is Difficulty.HARD:
        heatmap = compute_probability_heatmap(ai_outcome.board, memory)

    ai_won = all_ships_sunk(ai_outcome.board)
    if ai_won:
        logger.info("game_over winner=%s turns=%d", Turn.AI, session.turn_count + 1)
    next_session = replace(
        session,
        player_board=ai_outcome.board,
        current_turn=Turn.HUMAN,
        winner=Turn.AI if ai_won else None,
        phase=GamePhase.FINISHED if ai_won else GamePhase.PLAYING,
        turn_count=session.turn_count + 1,
        ai_memory=memory,
        heatmap=heatmap,
    )
    return TurnReport(
        session=next_session,
        player_outcome=player_outcome,
        ai_target=ai_target,
        ai_outcome=ai_outcome,
    )
