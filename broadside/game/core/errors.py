"""Domain errors raised by board construction and fleet placement."""

from __future__ import annotations


class BroadsideError(Exception):
    """Base class for game engine errors."""


class InvalidBoardSizeError(BroadsideError, ValueError):
    """Board requested with a non-positive or non-integer size."""

    def __init__(self, size: object) -> None:
        super().__init__(f"Board size must be a positive integer, got {size!r}.")
        self.size = size


class PlacementExhaustedError(BroadsideError, RuntimeError):
    """No legal placement was found for a ship."""

    def __init__(self, ship_id: str, board_size: int) -> None:
        super().__init__(f"Unable to place ship '{ship_id}' on board of size {board_size}.")
        self.ship_id = ship_id
        self.board_size = board_size
