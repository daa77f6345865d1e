"""Wall-object cell patterns.

A tile is a 2x2 cell block anchored at ``(gx, gy)``::

    (gx, gy)    (gx+1, gy)
    (gx, gy+1)  (gx+1, gy+1)

Straight walls only touch the cells along one edge of that block so the rest
of the tile stays walkable. Diagonals cannot be drawn at this resolution and
fill or clear the whole block instead.
"""

from __future__ import annotations

from ..logging_utils import log_debug
from ..schemas import WallObjectPlacement, WorldDefinitions
from .constants import (
    WALL_DIAGONAL_BACKSLASH,
    WALL_DIAGONAL_SLASH,
    WALL_HORIZONTAL,
    WALL_VERTICAL,
)
from .coords import CoordinateMapper
from .obstacles import ObstacleGrid
from .schemas import WallDescriptor


class WallModel:
    """Writes wall-objects into an ObstacleGrid."""

    def __init__(
        self,
        grid: ObstacleGrid,
        mapper: CoordinateMapper,
        definitions: WorldDefinitions,
    ):
        self.grid = grid
        self.mapper = mapper
        self.definitions = definitions

    def place(self, placement: WallObjectPlacement) -> None:
        gx, gy = self.mapper.world_to_grid(placement.x, placement.y)

        if not self.grid.in_bounds(gx, gy):
            log_debug(
                f"[Walls] Ignoring wall-object {placement.id} outside grid at "
                f"({placement.x}, {placement.y})"
            )
            return

        blocked = self.definitions.wall_object(placement.id).blocked
        direction = placement.direction

        if direction == WALL_VERTICAL:
            # The inner corner is written even for passable ids, so opening a
            # door clears it while the outer edge cell stays as it was.
            if blocked:
                self.grid.set(gx + 1, gy, True)
            self.grid.set(gx + 1, gy + 1, blocked)
        elif direction == WALL_HORIZONTAL:
            self.grid.set(gx, gy, blocked)
            if blocked:
                self.grid.set(gx + 1, gy, True)
        elif direction in (WALL_DIAGONAL_BACKSLASH, WALL_DIAGONAL_SLASH):
            self.grid.fill_tile(gx, gy, blocked)

    def apply_tile_walls(self, wall: WallDescriptor, column: int, row: int) -> None:
        """Place the wall components of a landscape tile.

        ``column`` counts tiles in grid order (mirrored), ``row`` is the world
        tile row. Landscape wall ids are 1-based.
        """
        x = self.mapper.grid_tile_to_world_x(column)

        if wall.diagonal is not None:
            orientation = (
                WALL_DIAGONAL_BACKSLASH
                if wall.diagonal.orientation == "\\"
                else WALL_DIAGONAL_SLASH
            )
            self.place(
                WallObjectPlacement(
                    id=wall.diagonal.overlay - 1, x=x, y=row, direction=orientation
                )
            )

        if wall.vertical:
            self.place(
                WallObjectPlacement(
                    id=wall.vertical - 1, x=x, y=row, direction=WALL_VERTICAL
                )
            )

        if wall.horizontal:
            self.place(
                WallObjectPlacement(
                    id=wall.horizontal - 1, x=x, y=row, direction=WALL_HORIZONTAL
                )
            )
