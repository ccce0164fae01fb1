"""Fleet placement validation and construction."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from functools import reduce

from broadside.game.core.board import Board, can_place_ship_at, create_empty_board, place_ship_at
from broadside.game.core.errors import PlacementExhaustedError
from broadside.game.core.models import (
    BOARD_SIZE,
    CellStatus,
    Coord,
    Orientation,
    Ship,
    build_fleet,
    cells_for_placement,
)

logger = logging.getLogger(__name__)

ATTEMPTS_PER_CELL = 10


def place_ship_randomly(board: Board, ship: Ship, rng: random.Random) -> Board:
    """Place ``ship`` at a random legal spot.

    Samples an orientation and an anchor where the ship fits on the grid until
    the placement does not overlap, giving up after ``size² × 10`` attempts.
    """
    size = board.size
    for _ in range(size * size * ATTEMPTS_PER_CELL):
        orientation = Orientation.HORIZONTAL if rng.random() < 0.5 else Orientation.VERTICAL
        horizontal = orientation is Orientation.HORIZONTAL
        max_x = size - ship.length if horizontal else size - 1
        max_y = size - 1 if horizontal else size - ship.length
        if max_x < 0 or max_y < 0:
            break
        anchor = Coord(rng.randrange(max_x + 1), rng.randrange(max_y + 1))
        cells = cells_for_placement(anchor, ship.length, orientation)
        if can_place_ship_at(board, cells):
            return place_ship_at(board, ship, cells)
    raise PlacementExhaustedError(ship.id, size)


def place_fleet_randomly(board: Board, ships: Sequence[Ship], rng: random.Random) -> Board:
    """Place ships in order, each on top of the previous board snapshot."""
    return reduce(lambda acc, ship: place_ship_randomly(acc, ship, rng), ships, board)


def candidate_placements(board: Board, length: int) -> list[list[Coord]]:
    """Enumerate every legal placement for a ship of ``length``."""
    candidates: list[list[Coord]] = []
    size = board.size
    for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
        max_x = size - length + 1 if orientation is Orientation.HORIZONTAL else size
        max_y = size if orientation is Orientation.HORIZONTAL else size - length + 1
        for y in range(max_y):
            for x in range(max_x):
                cells = cells_for_placement(Coord(x, y), length, orientation)
                if can_place_ship_at(board, cells):
                    candidates.append(cells)
    return candidates


def place_fleet_backtracking(
    board: Board,
    ships: Sequence[Ship],
    rng: random.Random,
    *,
    max_nodes: int | None = None,
) -> Board:
    """Place the fleet by depth-first search over shuffled candidates.

    A fleet whose total length exceeds the free cells fails immediately. The
    search visits at most ``max_nodes`` partial layouts (default
    ``size² × 10 × len(ships)``) and raises once that budget is spent.
    """
    size = board.size
    free_cells = int((board.status == CellStatus.EMPTY).sum())
    if sum(ship.length for ship in ships) > free_cells:
        raise PlacementExhaustedError(_first_overflowing(ships, free_cells).id, size)

    budget = max_nodes if max_nodes is not None else size * size * ATTEMPTS_PER_CELL * len(ships)
    nodes = 0
    deepest = 0

    def _place(current: Board, index: int) -> Board | None:
        nonlocal nodes, deepest
        if index == len(ships):
            return current
        nodes += 1
        if nodes > budget:
            return None
        deepest = max(deepest, index)
        ship = ships[index]
        candidates = candidate_placements(current, ship.length)
        rng.shuffle(candidates)
        for cells in candidates:
            placed = _place(place_ship_at(current, ship, cells), index + 1)
            if placed is not None or nodes > budget:
                return placed
        return None

    result = _place(board, 0)
    if result is None:
        if nodes > budget:
            logger.warning("backtracking_budget_spent nodes=%d size=%d ships=%d", budget, size, len(ships))
        raise PlacementExhaustedError(ships[deepest].id, size)
    return result


def _first_overflowing(ships: Sequence[Ship], free_cells: int) -> Ship:
    total = 0
    for ship in ships:
        total += ship.length
        if total > free_cells:
            return ship
    return ships[-1]


def random_fleet_board(
    rng: random.Random,
    size: int = BOARD_SIZE,
    ships: Sequence[Ship] | None = None,
    *,
    retries: int = 3,
) -> Board:
    """Build a board holding a randomly placed fleet.

    Random placement is retried from scratch before falling back to
    backtracking, so a placeable fleet always comes back placed.
    """
    fleet = list(ships) if ships is not None else build_fleet()
    for attempt in range(1, retries + 1):
        try:
            return place_fleet_randomly(create_empty_board(size), fleet, rng)
        except PlacementExhaustedError as exc:
            logger.info("random_placement_retry attempt=%d ship=%s size=%d", attempt, exc.ship_id, size)
    logger.warning("fleet_placement_fallback strategy=backtracking size=%d ships=%d", size, len(fleet))
    return place_fleet_backtracking(create_empty_board(size), fleet, rng)


def validate_fleet(board: Board, expected: Sequence[Ship]) -> tuple[bool, str]:
    """Validate that ``board`` carries exactly the expected, well-formed ships."""
    expected_ids = [ship.id for ship in expected]
    placed_ids = [ship.id for ship in board.ships]
    seen: set[str] = set()
    for ship_id in placed_ids:
        if ship_id in seen:
            return False, f"Duplicate ship: {ship_id}."
        seen.add(ship_id)
        if ship_id not in expected_ids:
            return False, f"Unexpected ship: {ship_id}."

    missing = [ship_id for ship_id in expected_ids if ship_id not in seen]
    if missing:
        return False, f"Missing ships: {', '.join(missing)}."

    for ship in board.ships:
        if len(ship.coordinates) != ship.length:
            return False, f"Ship {ship.id} covers {len(ship.coordinates)} cells, expected {ship.length}."
        if not _is_contiguous(ship.coordinates):
            return False, f"Ship {ship.id} is not a straight contiguous line."
        for coord in ship.coordinates:
            if not board.in_bounds(coord):
                return False, f"Ship {ship.id} is out of bounds."
            owner = board.ship_at(coord)
            if owner is None or owner.id != ship.id:
                return False, f"Ship {ship.id} does not own cell ({coord.x}, {coord.y})."
            if board.status_at(coord) not in (CellStatus.SHIP, CellStatus.HIT):
                return False, f"Ship {ship.id} has an unmarked cell ({coord.x}, {coord.y})."
    return True, ""


def _is_contiguous(coordinates: Sequence[Coord]) -> bool:
    if len(coordinates) <= 1:
        return True
    xs = sorted(coord.x for coord in coordinates)
    ys = sorted(coord.y for coord in coordinates)
    if len(set(ys)) == 1:
        return xs == list(range(xs[0], xs[0] + len(xs)))
    if len(set(xs)) == 1:
        return ys == list(range(ys[0], ys[0] + len(ys)))
    return False
