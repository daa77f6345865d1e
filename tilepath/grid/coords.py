"""World tile <-> grid cell transforms.

World x grows in the opposite direction to grid x, so every conversion
mirrors the horizontal axis. Each tile owns a 2x2 block of cells whose anchor
(top-left in grid space) is what ``world_to_grid`` returns.
"""

from __future__ import annotations

from typing import Tuple

from ..schemas import Position
from .constants import GAP_SIZE, REGION_SIZE, TILE_SIZE


class CoordinateMapper:
    """Converts between world tiles and cells of a grid ``width`` cells wide."""

    def __init__(self, width: int, regions_y: int = 1):
        self.width = width
        self.regions_y = regions_y

    def world_to_grid(self, x: int, y: int) -> Tuple[int, int]:
        return self.width - (x + 1) * TILE_SIZE, y * TILE_SIZE

    def grid_to_world(self, gx: int, gy: int) -> Position:
        # Lossy: both cells of a tile map back to the same tile.
        return Position((self.width - gx - 1) // TILE_SIZE, gy // TILE_SIZE)

    def grid_tile_to_world_x(self, column: int) -> int:
        """Mirror a tile column counted in grid order back to world x."""
        return self.width // TILE_SIZE - column - 1

    def floor_offset(self, z: int) -> int:
        """First world tile row of floor ``z``.

        Floors sit one region row short of their full height apart, plus the
        gap. For the 19-region-tall game world this is 944 rows per floor.
        """
        return z * (REGION_SIZE * (self.regions_y - 1) + GAP_SIZE)

    def floor_of(self, y: int) -> int:
        """Floor index a world tile row belongs to (gap rows round down)."""
        return y // self.floor_offset(1)
