import random

from broadside.game.ai.difficulty import Difficulty
from broadside.game.core.board import create_empty_board
from broadside.game.core.models import Coord, GamePhase, Orientation, Ship, ShotResult, Turn
from broadside.game.core.rules import (
    GameSession,
    change_difficulty,
    create_session,
    next_ship_to_place,
    place_player_ship,
    player_fire,
    start_manual_placement,
)
from broadside.game.core.shot_resolution import receive_attack
from tests.broadside.helpers import FirstChoiceRandom, board_with_ships


def test_create_session_defaults(seeded_rng) -> None:
    session = create_session("medium", seeded_rng)
    assert session.difficulty is Difficulty.MEDIUM
    assert session.current_turn is Turn.HUMAN
    assert session.phase is GamePhase.PLAYING
    assert session.winner is None
    assert session.turn_count == 0
    assert len(session.player_board.ships) == 5
    assert len(session.ai_board.ships) == 5
    assert session.ai_memory.shot_history == ()


def test_player_fire_resolves_ai_answer(seeded_rng) -> None:
    session = create_session("easy", seeded_rng)
    report = player_fire(session, Coord(0, 0), seeded_rng)
    assert report.accepted
    assert report.ai_target is not None
    assert report.ai_outcome is not None
    assert report.session.turn_count == 1
    assert report.session.current_turn is Turn.HUMAN
    assert report.session.ai_memory.shot_history == (report.ai_target,)
    assert report.session.player_board is report.ai_outcome.board


def test_repeat_shot_does_not_consume_turn(seeded_rng) -> None:
    session = player_fire(create_session("easy", seeded_rng), Coord(4, 4), seeded_rng).session
    repeat = player_fire(session, Coord(4, 4), seeded_rng)
    assert repeat.session is session
    assert not repeat.accepted
    assert repeat.player_outcome is not None
    assert repeat.player_outcome.result is ShotResult.REPEAT

    outside = player_fire(session, Coord(10, 0), seeded_rng)
    assert outside.session is session
    assert outside.player_outcome is not None
    assert outside.player_outcome.result is ShotResult.INVALID


def test_player_fire_ignored_when_finished_or_not_human_turn() -> None:
    board = board_with_ships(3, [("a", [Coord(0, 0)])])
    finished = GameSession(player_board=board, ai_board=board, phase=GamePhase.FINISHED, winner=Turn.AI)
    assert player_fire(finished, Coord(0, 0), random.Random(1)).session is finished

    ai_turn = GameSession(player_board=board, ai_board=board, current_turn=Turn.AI)
    report = player_fire(ai_turn, Coord(0, 0), random.Random(1))
    assert report.session is ai_turn
    assert report.player_outcome is None


def test_human_wins_without_ai_answer() -> None:
    session = GameSession(
        player_board=board_with_ships(3, [("a", [Coord(2, 2)])]),
        ai_board=board_with_ships(3, [("b", [Coord(1, 1)])]),
    )
    report = player_fire(session, Coord(1, 1), random.Random(1))
    assert report.session.winner is Turn.HUMAN
    assert report.session.phase is GamePhase.FINISHED
    assert report.session.turn_count == 1
    assert report.ai_target is None
    assert report.session.ai_memory.shot_history == ()


def test_ai_can_win_in_its_answer() -> None:
    session = GameSession(
        player_board=board_with_ships(2, [("a", [Coord(0, 0)])]),
        ai_board=board_with_ships(2, [("b", [Coord(1, 1)])]),
    )
    report = player_fire(session, Coord(0, 0), FirstChoiceRandom())
    assert report.ai_target == Coord(0, 0)
    assert report.session.winner is Turn.AI
    assert report.session.phase is GamePhase.FINISHED


def test_hard_session_recomputes_heatmap(seeded_rng) -> None:
    session = create_session("hard", seeded_rng)
    assert session.heatmap is None
    report = player_fire(session, Coord(0, 0), seeded_rng)
    assert report.session.heatmap is not None
    assert report.ai_target is not None
    assert report.session.heatmap.heat_at(report.ai_target) == 0


def test_easy_session_leaves_heatmap_alone(seeded_rng) -> None:
    report = player_fire(create_session("easy", seeded_rng), Coord(0, 0), seeded_rng)
    assert report.session.heatmap is None


def test_ai_without_moves_does_not_raise() -> None:
    player_board = receive_attack(create_empty_board(1), Coord(0, 0)).board
    session = GameSession(
        player_board=player_board,
        ai_board=board_with_ships(2, [("b", [Coord(1, 1)])]),
    )
    report = player_fire(session, Coord(0, 0), random.Random(1))
    assert report.accepted
    assert report.ai_target is None
    assert report.session.winner is None
    assert report.session.phase is GamePhase.PLAYING
    assert report.session.current_turn is Turn.HUMAN
    assert report.session.turn_count == 1


def test_manual_placement_flow(seeded_rng) -> None:
    session = start_manual_placement("hard")
    assert session.phase is GamePhase.PLACING
    ship = next_ship_to_place(session)
    assert ship is not None and ship.id == "carrier"

    illegal = place_player_ship(session, Coord(8, 0), Orientation.HORIZONTAL, seeded_rng)
    assert illegal is session

    for row in (0, 2, 4, 6):
        session = place_player_ship(session, Coord(0, row), Orientation.HORIZONTAL, seeded_rng)
        assert session.phase is GamePhase.PLACING
    overlapping = place_player_ship(session, Coord(0, 6), Orientation.VERTICAL, seeded_rng)
    assert overlapping is session

    session = place_player_ship(session, Coord(9, 8), Orientation.VERTICAL, seeded_rng)
    assert session.phase is GamePhase.PLAYING
    assert session.placement_index is None
    assert session.difficulty is Difficulty.HARD
    assert [s.id for s in session.player_board.ships] == [
        "carrier",
        "battleship",
        "cruiser",
        "submarine",
        "destroyer",
    ]
    assert len(session.ai_board.ships) == 5
    assert next_ship_to_place(session) is None


def test_manual_placement_with_custom_fleet(seeded_rng) -> None:
    fleet = [Ship(id="raft", name="Raft", length=1)]
    session = start_manual_placement("easy", size=3)
    session = place_player_ship(session, Coord(1, 1), Orientation.HORIZONTAL, seeded_rng, fleet)
    assert session.phase is GamePhase.PLAYING
    assert session.ai_board.size == 3
    assert [s.id for s in session.ai_board.ships] == ["raft"]


def test_change_difficulty_while_placing_keeps_board(seeded_rng) -> None:
    session = start_manual_placement("easy")
    session = place_player_ship(session, Coord(0, 0), Orientation.HORIZONTAL, seeded_rng)
    changed = change_difficulty(session, "hard", seeded_rng)
    assert changed.difficulty is Difficulty.HARD
    assert changed.player_board is session.player_board
    assert changed.placement_index == 1


def test_change_difficulty_while_playing_starts_fresh(seeded_rng) -> None:
    session = player_fire(create_session("easy", seeded_rng), Coord(3, 3), seeded_rng).session
    changed = change_difficulty(session, "medium", seeded_rng)
    assert changed.difficulty is Difficulty.MEDIUM
    assert changed.turn_count == 0
    assert changed.ai_memory.shot_history == ()
    assert changed.phase is GamePhase.PLAYING
