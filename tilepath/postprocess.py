"""Turn raw grid paths into world steps, and answer single-step/visibility queries.

Grid paths come out of the search at cell resolution, so several consecutive
cells collapse onto the same tile. ``to_world_steps`` removes those, and
``smooth_corners`` drops the elbow of a horizontal-then-vertical turn when the
tile inside the elbow is open, letting the mover cut across diagonally.

``is_valid_step`` and ``line_of_sight`` do not touch the search at all; they
serve per-tick movement validation and ranged line-of-sight checks.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Sequence, Tuple

from .grid.coords import CoordinateMapper
from .grid.obstacles import ObstacleGrid
from .schemas import Position, StepDelta

Cell = Tuple[int, int]

_START = False
_END = True

# Wall cells consulted per movement direction. Each entry is
# (x from end tile?, y from end tile?, cell offset x, cell offset y).
# World +x is west and +y is south.
STEP_WALL_CHECKS: Dict[Tuple[int, int], Tuple[Tuple[bool, bool, int, int], ...]] = {
    # north: horizontal wall on the current tile
    (0, -1): ((_START, _START, 0, 0),),
    # north-west
    (1, -1): (
        (_START, _START, 0, 0),
        (_END, _START, 1, 0),
        (_END, _END, 1, 1),
    ),
    # west: vertical wall on the tile to the west
    (1, 0): ((_END, _START, 1, 1),),
    # south-west
    (1, 1): (
        (_START, _END, 0, 0),
        (_END, _START, 1, 1),
        (_END, _END, 1, 0),
    ),
    # south: horizontal wall on the destination tile
    (0, 1): ((_END, _END, 0, 0),),
    # south-east
    (-1, 1): (
        (_START, _START, 1, 1),
        (_START, _END, 1, 0),
    ),
    # east: vertical wall on the current tile
    (-1, 0): ((_START, _START, 1, 1),),
    # north-east
    (-1, -1): (
        (_START, _START, 0, 0),
        (_START, _END, 1, 1),
        (_END, _START, 0, 0),
    ),
}


class LineOfSight:
    """Restartable sequence of tiles on the straight line from ``start`` to ``end``.

    Uses a digital differential analyzer: ``max(|dx|, |dy|)`` equal steps,
    each sample floored to a tile. Both endpoints are included.
    """

    def __init__(self, start: Position, end: Position):
        self.start = Position(*start)
        self.end = Position(*end)

    @property
    def steps(self) -> int:
        return max(abs(self.end.x - self.start.x), abs(self.end.y - self.start.y))

    def __iter__(self) -> Iterator[Position]:
        steps = self.steps
        if steps == 0:
            yield self.start
            return

        delta_x = self.end.x - self.start.x
        delta_y = self.end.y - self.start.y
        for i in range(steps + 1):
            # Integer floor division keeps samples exact.
            yield Position(
                self.start.x + (delta_x * i) // steps,
                self.start.y + (delta_y * i) // steps,
            )

    def __len__(self) -> int:
        return self.steps + 1

    def __repr__(self) -> str:
        return f"LineOfSight({tuple(self.start)} -> {tuple(self.end)})"


class PathPostProcessor:
    """World-space helpers over a shared ObstacleGrid."""

    def __init__(self, grid: ObstacleGrid, mapper: CoordinateMapper):
        self.grid = grid
        self.mapper = mapper

    def to_world_steps(self, grid_path: Sequence[Cell]) -> List[Position]:
        """Map grid cells (minus the start anchor) to tiles, dropping repeats.

        Cells that still fall on the start anchor's tile count as repeats.
        """
        steps: List[Position] = []
        if not grid_path:
            return steps

        last = self.mapper.grid_to_world(*grid_path[0])
        for gx, gy in grid_path[1:]:
            position = self.mapper.grid_to_world(gx, gy)
            if position == last:
                continue
            steps.append(position)
            last = position

        return steps

    def is_tile_blocked(self, x: int, y: int) -> bool:
        """Whether the inner cell of a tile (the one searches stand on) is blocked."""
        gx, gy = self.mapper.world_to_grid(x, y)
        return self.grid.get(gx + 1, gy + 1)

    def smooth_corners(self, steps: Sequence[Position]) -> List[Position]:
        """Drop horizontal-then-vertical elbows whose inside tile is open.

        Vertical-then-horizontal elbows are kept. The step after a cut elbow
        always starts with a vertical leg, so consecutive steps are never both
        dropped. The first and last steps are always kept.
        """
        if len(steps) < 3:
            return list(steps)

        smoothed = [steps[0]]
        for previous, step, following in zip(steps, steps[1:], steps[2:]):
            if self._can_cut_corner(previous, step, following):
                continue
            smoothed.append(step)
        smoothed.append(steps[-1])

        return smoothed

    def _can_cut_corner(
        self, previous: Position, step: Position, following: Position
    ) -> bool:
        leg_in = (step[0] - previous[0], step[1] - previous[1])
        leg_out = (following[0] - step[0], following[1] - step[1])

        if not (_is_horizontal_unit(leg_in) and _is_vertical_unit(leg_out)):
            return False

        inside_x = previous[0] + following[0] - step[0]
        inside_y = previous[1] + following[1] - step[1]
        return not self.is_tile_blocked(inside_x, inside_y)

    def line_of_sight(self, start: Position, end: Position) -> LineOfSight:
        return LineOfSight(start, end)

    def is_valid_step(self, position: Position, delta: StepDelta) -> bool:
        """Check a single move of at most one tile against the grid's walls."""
        start_x, start_y = position
        delta_x, delta_y = delta
        end_x = start_x + delta_x
        end_y = start_y + delta_y

        gx, gy = self.mapper.world_to_grid(end_x, end_y)
        if (
            self.grid.get(gx, gy)
            and self.grid.get(gx + 1, gy)
            and self.grid.get(gx, gy + 1)
            and self.grid.get(gx + 1, gy + 1)
        ):
            return False

        for use_end_x, use_end_y, offset_x, offset_y in STEP_WALL_CHECKS.get(
            (delta_x, delta_y), ()
        ):
            tile_x = end_x if use_end_x else start_x
            tile_y = end_y if use_end_y else start_y
            if self._wall_cell(tile_x, tile_y, offset_x, offset_y):
                return False

        return True

    def _wall_cell(self, x: int, y: int, offset_x: int, offset_y: int) -> bool:
        gx, gy = self.mapper.world_to_grid(x, y)
        return self.grid.get(gx + offset_x, gy + offset_y)


def _is_horizontal_unit(leg: Tuple[int, int]) -> bool:
    return abs(leg[0]) == 1 and leg[1] == 0


def _is_vertical_unit(leg: Tuple[int, int]) -> bool:
    return leg[0] == 0 and abs(leg[1]) == 1
