"""Dense obstacle bitset at twice tile resolution."""

from __future__ import annotations

import numpy as np

from .constants import TILE_SIZE


class ObstacleGrid:
    """
    Blocked/unblocked cells addressed as ``(x, y)`` grid coordinates.

    Backed by a ``numpy`` bool array of shape ``(width, height)``. Reads
    outside the grid report blocked; writes outside the grid are ignored.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells = np.zeros((width, height), dtype=bool)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return True
        return bool(self.cells[x, y])

    def set(self, x: int, y: int, blocked: bool = True) -> None:
        if self.in_bounds(x, y):
            self.cells[x, y] = blocked

    def fill_tile(self, x: int, y: int, blocked: bool = True) -> None:
        """(Un)fill the TILE_SIZE x TILE_SIZE block anchored at cell ``(x, y)``."""
        self.fill_rect(x, y, TILE_SIZE, TILE_SIZE, blocked)

    def fill_rect(
        self, x: int, y: int, width: int, height: int, blocked: bool = True
    ) -> None:
        """(Un)fill a rectangle of cells, clipped to the grid."""
        x_stop = min(self.width, x + width)
        y_stop = min(self.height, y + height)
        x = max(0, x)
        y = max(0, y)
        if x < x_stop and y < y_stop:
            self.cells[x:x_stop, y:y_stop] = blocked

    def is_walkable(self, x: int, y: int) -> bool:
        return not self.get(x, y)

    def blocked_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObstacleGrid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and bool(np.array_equal(self.cells, other.cells))
        )

    def __repr__(self) -> str:
        return (
            f"ObstacleGrid({self.width}x{self.height}, "
            f"blocked={self.blocked_count()}/{self.width * self.height})"
        )
