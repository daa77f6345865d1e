"""Shared synthetic worlds for tilepath tests.

Everything is built in code: one or two 48x48 regions, grass everywhere
unless a test paints something else.
"""

from __future__ import annotations

import pytest

from tilepath.grid import GridBuilder, Landscape, Region, TileState
from tilepath.grid.constants import REGION_SIZE
from tilepath.schemas import (
    ObjectDefinition,
    TileDefinition,
    WallObjectDefinition,
    WorldDefinitions,
)

# Tile overlay ids as stored in landscape data (1-based)
GRASS = 1
WATER = 2

# Wall-object ids (0-based table index; landscape walls use id + 1)
STONE_WALL = 0
LOW_FENCE = 3

# Object ids
TREE = 0
TABLE = 1
FLOWERS = 2
CLOSED_DOOR = 3
OPEN_DOOR = 4
CLOSED_GATE = 5


def make_definitions() -> WorldDefinitions:
    return WorldDefinitions(
        tiles=[
            TileDefinition(name="grass", blocked=False),
            TileDefinition(name="water", blocked=True),
        ],
        wall_objects=[
            WallObjectDefinition(name="stone wall", blocked=True),
            WallObjectDefinition(name="doorframe", blocked=False),
            WallObjectDefinition(name="door", blocked=True),
            WallObjectDefinition(name="low fence", blocked=False),
        ],
        objects=[
            ObjectDefinition(name="tree", type="blocked", width=1, height=1),
            ObjectDefinition(name="table", type="blocked", width=2, height=1),
            ObjectDefinition(name="flowers", type="unblocked"),
            ObjectDefinition(name="door", type="closed-door", width=1, height=1),
            ObjectDefinition(name="door", type="open-door", width=1, height=1),
            ObjectDefinition(name="gate", type="closed-door", width=1, height=2),
        ],
    )


def make_landscape(
    regions_x: int = 1,
    regions_y: int = 1,
    depth: int = 1,
    missing: tuple = (),
) -> Landscape:
    """Grass landscape; region coordinates listed in ``missing`` stay unloaded."""
    regions = [
        Region(x=x, y=y, z=z)
        for z in range(depth)
        for x in range(regions_x)
        for y in range(regions_y)
        if (x, y, z) not in missing
    ]
    return Landscape(
        min_region_x=0,
        max_region_x=regions_x - 1,
        min_region_y=0,
        max_region_y=regions_y - 1,
        depth=depth,
        regions=regions,
    )


def set_world_tile(landscape: Landscape, x: int, y: int, tile: TileState, z: int = 0) -> None:
    """Overwrite the landscape tile that lands on world tile ``(x, y)`` of floor ``z``.

    Region tile columns run opposite to world x.
    """
    region_x, local_x = divmod(x, REGION_SIZE)
    region_y, local_y = divmod(y, REGION_SIZE)
    region = landscape.sector(region_x, region_y, z)
    region.tiles[REGION_SIZE - 1 - local_x][local_y] = tile


def build_grid(landscape: Landscape, definitions: WorldDefinitions = None) -> GridBuilder:
    builder = GridBuilder.for_landscape(landscape, definitions or make_definitions())
    builder.build(landscape)
    return builder


@pytest.fixture
def definitions() -> WorldDefinitions:
    return make_definitions()


@pytest.fixture
def landscape() -> Landscape:
    return make_landscape()


@pytest.fixture
def builder(landscape, definitions) -> GridBuilder:
    return build_grid(landscape, definitions)
