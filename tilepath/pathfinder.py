"""
Main pathfinding facade.

Builds the obstacle grid once from landscape geometry, then serves route
queries while objects and wall-objects are placed or replaced at runtime.

Flow of a route query:
1. Convert both world tiles to their inner grid cells
2. Register the query with the search engine
3. Wait while the scheduler advances all pending queries slice by slice
4. Collapse the grid path into world tiles and cut open corners

All work runs on the caller's event loop. A placement made while a query is
in flight may or may not be seen by that query, depending on where its
search frontier is when the placement lands.
"""

import asyncio
from typing import Any, Iterable, List, Mapping, Optional, Union

from .config import Config
from .grid import GridBuilder, Landscape
from .logging_utils import log_debug, log_error
from .postprocess import LineOfSight, PathPostProcessor
from .render import render_grid
from .schemas import (
    ObjectPlacement,
    Position,
    StepDelta,
    WallObjectPlacement,
    WorldDefinitions,
)
from .search import PathSearchEngine, SearchScheduler
from .search.scheduler import SleepFn

ObjectPlacementLike = Union[ObjectPlacement, Mapping[str, Any]]
WallObjectPlacementLike = Union[WallObjectPlacement, Mapping[str, Any]]


class PathFinder:
    """
    Route queries over a multi-floor tile world.

    Dependencies are passed in; Config only supplies defaults for the
    scheduler cadence and the per-slice expansion budget.
    """

    def __init__(
        self,
        definitions: WorldDefinitions,
        landscape: Landscape,
        tick_rate: Optional[int] = None,
        iterations_per_calculation: Optional[int] = None,
        sleep: SleepFn = asyncio.sleep,
    ):
        """Build the obstacle grid and wire the search components.

        Args:
            definitions: Validated object/wall-object/tile definition tables
            landscape: Region bounds, floor count and loaded regions
            tick_rate: Idle polling interval in milliseconds
                (defaults to Config.TICK_RATE_MS)
            iterations_per_calculation: Node expansions per work slice
                (defaults to Config.ITERATIONS_PER_CALCULATION)
            sleep: Awaitable used between slices; injectable for tests

        Raises:
            UnknownDefinitionError: If the landscape references an undefined
                tile overlay or wall id
        """
        Config.validate()

        self.definitions = definitions
        self.tick_rate = tick_rate if tick_rate is not None else Config.TICK_RATE_MS

        self.builder = GridBuilder.for_landscape(landscape, definitions)
        self.grid = self.builder.build(landscape)
        self.mapper = self.builder.mapper

        self.engine = PathSearchEngine(self.grid, iterations_per_calculation)
        self.scheduler = SearchScheduler(
            self.engine, idle_interval=self.tick_rate / 1000, sleep=sleep
        )
        self.postprocessor = PathPostProcessor(self.grid, self.mapper)

    @property
    def paths_remaining(self) -> int:
        return self.engine.pending_count

    @property
    def is_running(self) -> bool:
        return self.scheduler.is_running

    # ------------------------------------------------------------------
    # Placements
    # ------------------------------------------------------------------

    def place_object(self, placement: ObjectPlacementLike) -> None:
        """Place a scenery object. Out-of-grid placements are ignored.

        Raises:
            UnknownDefinitionError: If the object id is not defined
        """
        if not isinstance(placement, ObjectPlacement):
            placement = ObjectPlacement.model_validate(placement)
        self.builder.place_object(placement)

    def place_objects(self, placements: Iterable[ObjectPlacementLike]) -> None:
        for placement in placements:
            self.place_object(placement)

    def place_wall_object(self, placement: WallObjectPlacementLike) -> None:
        """Place (or replace) a wall-object. Out-of-grid placements are ignored.

        Raises:
            UnknownDefinitionError: If the wall-object id is not defined
        """
        if not isinstance(placement, WallObjectPlacement):
            placement = WallObjectPlacement.model_validate(placement)
        self.builder.place_wall_object(placement)

    def place_wall_objects(self, placements: Iterable[WallObjectPlacementLike]) -> None:
        for placement in placements:
            self.place_wall_object(placement)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def find_path(self, start: Position, end: Position) -> List[Position]:
        """Return the world steps from ``start`` (exclusive) to ``end``.

        Resolves to an empty list when ``end`` is unreachable or equals
        ``start``, and when the search itself fails (the error is logged).
        Only resolves while the scheduler is running.
        """
        start = Position(*start)
        end = Position(*end)

        if self.mapper.floor_of(start.y) != self.mapper.floor_of(end.y):
            log_debug(f"[PathFinder] {start} and {end} are on different floors")
            return []

        start_x, start_y = self.mapper.world_to_grid(*start)
        end_x, end_y = self.mapper.world_to_grid(*end)

        try:
            path = await self.engine.find_path(
                (start_x + 1, start_y + 1), (end_x + 1, end_y + 1)
            )
        except Exception as exc:
            log_error(f"[PathFinder] Route {tuple(start)}->{tuple(end)} failed: {exc}")
            return []

        if path is None:
            return []

        return self.postprocessor.smooth_corners(self.postprocessor.to_world_steps(path))

    def is_valid_step(self, position: Position, delta: StepDelta) -> bool:
        return self.postprocessor.is_valid_step(Position(*position), StepDelta(*delta))

    def line_of_sight(self, start: Position, end: Position) -> LineOfSight:
        return self.postprocessor.line_of_sight(start, end)

    # ------------------------------------------------------------------
    # Run loop
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the search loop on the running event loop."""
        self.scheduler.start()

    def stop(self) -> None:
        """Cease the search loop. Queries still in flight stay unresolved."""
        self.scheduler.stop()

    def render(self, path: Optional[Iterable[Position]] = None):
        """Draw the obstacle grid (and ``path``) to a Pillow image."""
        return render_grid(self.grid, path)
