"""Per-game AI memory and its post-shot update rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from broadside.game.ai.targeting import adjacent_cells, is_valid_target
from broadside.game.core.board import Board
from broadside.game.core.models import Coord, Ship


class Direction(StrEnum):
    """Compass direction of an ongoing pursuit."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


@dataclass(frozen=True, slots=True)
class AIMemory:
    """What the AI remembers between its own turns.

    ``current_direction`` is carried for callers that want it; none of the
    built-in strategies read it.
    """

    shot_history: tuple[Coord, ...] = ()
    hunt_queue: tuple[Coord, ...] = ()
    last_hit: Coord | None = None
    current_direction: Direction | None = None
    hit_streak: tuple[Coord, ...] = ()
    fired: frozenset[Coord] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fired", frozenset(self.shot_history))

    def has_fired_at(self, coord: Coord) -> bool:
        return coord in self.fired


def create_initial_memory() -> AIMemory:
    """Return empty memory for a new game."""
    return AIMemory()


def update_memory_after_shot(
    memory: AIMemory,
    target: Coord,
    was_hit: bool,
    board: Board,
    sunk_ship: Ship | None = None,
) -> AIMemory:
    """Fold one AI shot outcome into memory.

    ``board`` is the target board after the shot was applied.
    """
    if memory.has_fired_at(target):
        history = memory.shot_history
    else:
        history = (*memory.shot_history, target)
    fired = memory.fired | {target}

    if sunk_ship is not None:
        queue = tuple(coord for coord in memory.hunt_queue if not _owned_by(board, coord, sunk_ship))
        return AIMemory(shot_history=history, hunt_queue=queue)

    if was_hit:
        pending = set(memory.hunt_queue)
        leads: list[Coord] = []
        for coord in adjacent_cells(target):
            if coord in pending or not is_valid_target(board, coord, fired):
                continue
            pending.add(coord)
            leads.append(coord)
        return AIMemory(
            shot_history=history,
            hunt_queue=(*leads, *memory.hunt_queue),
            last_hit=target,
            current_direction=memory.current_direction,
            hit_streak=(*memory.hit_streak, target),
        )

    return AIMemory(
        shot_history=history,
        hunt_queue=tuple(coord for coord in memory.hunt_queue if coord != target),
        last_hit=memory.last_hit,
        current_direction=memory.current_direction,
        hit_streak=memory.hit_streak,
    )


def _owned_by(board: Board, coord: Coord, ship: Ship) -> bool:
    if not board.in_bounds(coord):
        return False
    owner = board.ship_at(coord)
    return owner is not None and owner.id == ship.id
