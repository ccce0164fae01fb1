"""Shot outcome evaluation (miss/hit/sunk/repeat)."""

from __future__ import annotations

from dataclasses import dataclass

from broadside.game.core.board import NO_SHIP, Board
from broadside.game.core.models import CellStatus, Coord, Ship, ShotResult


@dataclass(frozen=True, slots=True)
class AttackOutcome:
    """Board after a shot, plus what the shot did."""

    board: Board
    hit: bool
    sunk_ship: Ship | None = None
    result: ShotResult = ShotResult.MISS

    @property
    def changed(self) -> bool:
        """Whether the shot consumed a turn (not a repeat or out of bounds)."""
        return self.result not in (ShotResult.REPEAT, ShotResult.INVALID)


def receive_attack(board: Board, target: Coord) -> AttackOutcome:
    """Resolve one shot against ``board``.

    Out-of-bounds and already resolved targets return the given board object
    untouched, so repeated attacks are idempotent.
    """
    if not board.in_bounds(target):
        return AttackOutcome(board=board, hit=False, result=ShotResult.INVALID)

    current = board.status_at(target)
    if current.resolved:
        return AttackOutcome(board=board, hit=current is CellStatus.HIT, result=ShotResult.REPEAT)

    status = board.status.copy()
    if current is CellStatus.EMPTY:
        status[target.y, target.x] = CellStatus.MISS
        next_board = Board(size=board.size, status=status, owner=board.owner, ships=board.ships)
        return AttackOutcome(board=next_board, hit=False, result=ShotResult.MISS)

    status[target.y, target.x] = CellStatus.HIT
    index = int(board.owner[target.y, target.x])
    if index == NO_SHIP:
        next_board = Board(size=board.size, status=status, owner=board.owner, ships=board.ships)
        return AttackOutcome(board=next_board, hit=True, result=ShotResult.HIT)

    updated = board.ships[index].with_hit()
    ships = (*board.ships[:index], updated, *board.ships[index + 1 :])
    next_board = Board(size=board.size, status=status, owner=board.owner, ships=ships)
    if updated.is_sunk:
        return AttackOutcome(board=next_board, hit=True, sunk_ship=updated, result=ShotResult.SUNK)
    return AttackOutcome(board=next_board, hit=True, result=ShotResult.HIT)


def all_ships_sunk(board: Board) -> bool:
    """Return whether the board has ships and every one of them is sunk."""
    return bool(board.ships) and all(ship.is_sunk for ship in board.ships)


def remaining_ships(board: Board) -> list[Ship]:
    """Return ships that are still afloat."""
    return [ship for ship in board.ships if not ship.is_sunk]
