"""
Tilepath - route finding for tile-based, multi-floor game worlds.

Builds a sub-tile obstacle grid from landscape geometry and placed scenery,
then answers route, single-step and line-of-sight queries against it.

Route searches are budgeted and time-sliced on the caller's asyncio loop,
so many queries can be in flight without blocking the host.
"""

__version__ = "0.1.0"

# Main entry point
from .pathfinder import PathFinder

# Loading
from .loader import WorldLoader

# Components
from .grid import (
    CoordinateMapper,
    GridBuilder,
    ObstacleGrid,
    WallModel,
    DiagonalWall,
    Landscape,
    Region,
    TileState,
    WallDescriptor,
)
from .search import PathSearchEngine, SearchScheduler, QueryState
from .postprocess import LineOfSight, PathPostProcessor
from .render import RenderUnavailableError, render_grid

# Schemas
from .schemas import (
    DOOR,
    DOORFRAME,
    ObjectDefinition,
    ObjectPlacement,
    Position,
    StepDelta,
    TileDefinition,
    UnknownDefinitionError,
    WallObjectDefinition,
    WallObjectPlacement,
    WorldDefinitions,
)

__all__ = [
    # Main class
    "PathFinder",
    "WorldLoader",
    # Components
    "CoordinateMapper",
    "GridBuilder",
    "ObstacleGrid",
    "WallModel",
    "PathSearchEngine",
    "SearchScheduler",
    "QueryState",
    "PathPostProcessor",
    "LineOfSight",
    "render_grid",
    # Geometry schemas
    "Landscape",
    "Region",
    "TileState",
    "WallDescriptor",
    "DiagonalWall",
    # Definition schemas
    "WorldDefinitions",
    "ObjectDefinition",
    "WallObjectDefinition",
    "TileDefinition",
    "ObjectPlacement",
    "WallObjectPlacement",
    "Position",
    "StepDelta",
    "DOOR",
    "DOORFRAME",
    # Errors
    "UnknownDefinitionError",
    "RenderUnavailableError",
]
