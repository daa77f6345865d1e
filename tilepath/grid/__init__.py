"""Obstacle grid construction for tilepath."""

from .builder import DOOR_DIRECTIONS, GridBuilder, grid_dimensions
from .constants import GAP_SIZE, REGION_SIZE, TILE_SIZE
from .coords import CoordinateMapper
from .obstacles import ObstacleGrid
from .schemas import DiagonalWall, Landscape, Region, TileState, WallDescriptor
from .walls import WallModel

__all__ = [
    "GridBuilder",
    "grid_dimensions",
    "DOOR_DIRECTIONS",
    "CoordinateMapper",
    "ObstacleGrid",
    "WallModel",
    "Landscape",
    "Region",
    "TileState",
    "WallDescriptor",
    "DiagonalWall",
    "GAP_SIZE",
    "REGION_SIZE",
    "TILE_SIZE",
]
