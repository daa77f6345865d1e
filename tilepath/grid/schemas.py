"""Pydantic schemas for static world geometry.

The landscape is a rectangular block of 48x48-tile regions per floor. Regions
that were never loaded are simply absent and read back as ``None`` from
``Landscape.sector``.
"""

from __future__ import annotations

from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator

from .constants import REGION_SIZE


class DiagonalWall(BaseModel):
    """Diagonal partition across a tile."""

    overlay: int = Field(..., ge=1, description="1-based wall-object id")
    orientation: Literal["\\", "/"] = "\\"


class WallDescriptor(BaseModel):
    """Wall components of a tile. Ids are 1-based, 0 means absent."""

    vertical: int = Field(0, ge=0)
    horizontal: int = Field(0, ge=0)
    diagonal: Optional[DiagonalWall] = None


class TileState(BaseModel):
    """Terrain overlay (1-based tile id, 0 for none) and walls of one tile."""

    overlay: int = Field(0, ge=0)
    wall: WallDescriptor = Field(default_factory=WallDescriptor)


class Region(BaseModel):
    """A 48x48 block of tiles at absolute region coordinates ``(x, y)`` on floor ``z``."""

    x: int
    y: int
    z: int = Field(0, ge=0)
    tiles: List[List[TileState]] = Field(
        default_factory=lambda: [
            [TileState() for _ in range(REGION_SIZE)] for _ in range(REGION_SIZE)
        ],
        description="tiles[x][y] within the region",
    )

    @field_validator("tiles")
    @classmethod
    def _check_shape(cls, tiles: List[List[TileState]]) -> List[List[TileState]]:
        if len(tiles) != REGION_SIZE or any(len(column) != REGION_SIZE for column in tiles):
            raise ValueError(f"region tiles must be {REGION_SIZE}x{REGION_SIZE}")
        return tiles

    def tile(self, x: int, y: int) -> TileState:
        return self.tiles[x][y]


class Landscape(BaseModel):
    """Region bounds, floor count and loaded regions of the world."""

    min_region_x: int
    max_region_x: int
    min_region_y: int
    max_region_y: int
    depth: int = Field(1, ge=1, description="Number of floors")
    regions: List[Region] = Field(default_factory=list)

    _index: Dict[Tuple[int, int, int], Region] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_bounds(self) -> "Landscape":
        if self.min_region_x > self.max_region_x or self.min_region_y > self.max_region_y:
            raise ValueError("region bounds must satisfy min <= max on both axes")
        return self

    def model_post_init(self, __context) -> None:
        self._index = {(region.x, region.y, region.z): region for region in self.regions}

    @property
    def regions_x(self) -> int:
        return self.max_region_x - self.min_region_x + 1

    @property
    def regions_y(self) -> int:
        return self.max_region_y - self.min_region_y + 1

    def sector(self, x: int, y: int, z: int) -> Optional[Region]:
        """Return the region at absolute region coordinates, or None if unloaded."""
        return self._index.get((x, y, z))
