"""Populate an ObstacleGrid from landscape geometry and placed objects.

Static geometry is written once at construction. Objects and wall-objects are
placed afterwards and may be re-placed at runtime (opening or closing a door
is just another placement over the same tile).
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from ..logging_utils import log_debug, log_deterministic
from ..schemas import (
    DOOR,
    DOORFRAME,
    ObjectDefinition,
    ObjectPlacement,
    WallObjectPlacement,
    WorldDefinitions,
)
from .constants import (
    GAP_SIZE,
    REGION_SIZE,
    TILE_SIZE,
    WALL_DIAGONAL_BACKSLASH,
    WALL_HORIZONTAL,
    WALL_VERTICAL,
)
from .coords import CoordinateMapper
from .obstacles import ObstacleGrid
from .schemas import Landscape, Region, TileState
from .walls import WallModel


# Door placement direction -> (wall orientation, start offset, per-door step)
DOOR_DIRECTIONS: Dict[int, Tuple[int, Tuple[int, int], Tuple[int, int]]] = {
    0: (WALL_VERTICAL, (0, 0), (0, 1)),
    2: (WALL_HORIZONTAL, (0, 1), (1, 0)),
    4: (WALL_VERTICAL, (1, 0), (0, 1)),
    6: (WALL_HORIZONTAL, (0, 0), (1, 0)),
    5: (WALL_DIAGONAL_BACKSLASH, (-1, 1), (-1, 1)),
    7: (WALL_DIAGONAL_BACKSLASH, (-1, 1), (-1, 1)),
}

# Quarter-turn placements swap footprint width and height
ROTATED_DIRECTIONS = (2, 6)


def grid_dimensions(landscape: Landscape) -> Tuple[int, int]:
    """Return ``(width, height)`` in cells for a landscape."""
    width = landscape.regions_x * REGION_SIZE * TILE_SIZE
    height = landscape.regions_y * REGION_SIZE * TILE_SIZE * landscape.depth
    height += GAP_SIZE * (landscape.depth - 1)
    return width, height


class GridBuilder:
    """Writes landscape tiles, objects and wall-objects into the grid."""

    def __init__(
        self,
        grid: ObstacleGrid,
        mapper: CoordinateMapper,
        definitions: WorldDefinitions,
    ):
        self.grid = grid
        self.mapper = mapper
        self.definitions = definitions
        self.walls = WallModel(grid, mapper, definitions)

    @classmethod
    def for_landscape(
        cls, landscape: Landscape, definitions: WorldDefinitions
    ) -> "GridBuilder":
        """Size an empty grid for ``landscape`` and return a builder over it."""
        width, height = grid_dimensions(landscape)
        grid = ObstacleGrid(width, height)
        mapper = CoordinateMapper(width, regions_y=landscape.regions_y)
        return cls(grid, mapper, definitions)

    # ------------------------------------------------------------------
    # Static geometry
    # ------------------------------------------------------------------

    def build(self, landscape: Landscape) -> ObstacleGrid:
        """Write every floor of ``landscape`` into the grid.

        Regions missing from the landscape are filled, as are the rows that
        belong to no floor.
        """
        regions_x = landscape.regions_x
        loaded = 0

        self._fill_gaps(landscape)

        for z in range(landscape.depth):
            y_offset = self.mapper.floor_offset(z)

            for x in range(regions_x):
                for y in range(landscape.regions_y):
                    region = landscape.sector(
                        x + landscape.min_region_x, y + landscape.min_region_y, z
                    )
                    if region is not None:
                        loaded += 1
                    self._add_region(region, regions_x - 1 - x, y, y_offset)

        log_deterministic(
            f"[Grid] Built {self.grid.width}x{self.grid.height} obstacle grid from "
            f"{loaded} regions over {landscape.depth} floor(s); "
            f"{self.grid.blocked_count()} cells blocked"
        )
        return self.grid

    def _fill_gaps(self, landscape: Landscape) -> None:
        """Block every grid row outside the floors, including the tail below the top floor."""
        floor_rows = landscape.regions_y * REGION_SIZE * TILE_SIZE
        row = floor_rows

        for z in range(1, landscape.depth):
            next_floor = self.mapper.floor_offset(z) * TILE_SIZE
            self.grid.fill_rect(0, row, self.grid.width, next_floor - row)
            row = next_floor + floor_rows

        self.grid.fill_rect(0, row, self.grid.width, self.grid.height - row)

    def _add_region(
        self, region: Optional[Region], region_column: int, region_row: int, y_offset: int
    ) -> None:
        column0 = region_column * REGION_SIZE
        row0 = region_row * REGION_SIZE + y_offset

        if region is None:
            # Unloaded regions fail closed.
            span = REGION_SIZE * TILE_SIZE
            self.grid.fill_rect(column0 * TILE_SIZE, row0 * TILE_SIZE, span, span)
            return

        for x in range(REGION_SIZE):
            for y in range(REGION_SIZE):
                self._add_tile(region.tile(x, y), column0 + x, row0 + y)

    def _add_tile(self, tile: TileState, column: int, row: int) -> None:
        if tile.overlay and self.definitions.tile(tile.overlay - 1).blocked:
            self.grid.fill_tile(column * TILE_SIZE, row * TILE_SIZE)
            return

        self.walls.apply_tile_walls(tile.wall, column, row)

    # ------------------------------------------------------------------
    # Runtime placements
    # ------------------------------------------------------------------

    def place_object(self, placement: ObjectPlacement) -> None:
        """Apply a scenery object: footprint fill, door walls, or nothing."""
        definition = self.definitions.object(placement.id)

        if definition.is_unblocked:
            return

        if definition.is_door:
            self._place_door(definition, placement)
            return

        gx, gy = self.mapper.world_to_grid(placement.x, placement.y)

        if not self.grid.in_bounds(gx, gy):
            log_debug(
                f"[Objects] Ignoring object {placement.id} outside grid at "
                f"({placement.x}, {placement.y})"
            )
            return

        width, height = definition.width, definition.height
        if placement.direction in ROTATED_DIRECTIONS:
            width, height = height, width

        # World x grows leftwards in grid space.
        for i in range(width):
            for j in range(height):
                self.grid.fill_tile(gx - i * TILE_SIZE, gy + j * TILE_SIZE)

    def _place_door(self, definition: ObjectDefinition, placement: ObjectPlacement) -> None:
        orientation, (offset_x, offset_y), (dx, dy) = DOOR_DIRECTIONS.get(
            placement.direction, (placement.direction, (0, 0), (0, 0))
        )
        wall_id = DOOR if definition.is_closed_door else DOORFRAME
        x = placement.x + offset_x
        y = placement.y + offset_y

        for i in range(definition.height):
            self.place_wall_object(
                WallObjectPlacement(
                    id=wall_id, x=x + dx * i, y=y + dy * i, direction=orientation
                )
            )

    def place_wall_object(self, placement: WallObjectPlacement) -> None:
        self.walls.place(placement)
