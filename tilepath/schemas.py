"""
Pydantic schemas for tilepath definition tables and placements.

Definition tables are loaded once (from the game's config archive dump or a
JSON file) and validated up front. Lookups by id go through
``WorldDefinitions`` so an id missing from a table fails with a named error at
load/build time instead of surfacing later as a missing attribute.

Design Philosophy:
- One fixed-schema model per definition kind (tiles, objects, wall objects)
- Tables are plain lists indexed by id, matching the archive layout
- Placements are transient inputs: validated, applied to the grid, discarded
"""

from __future__ import annotations

import re
from typing import List, NamedTuple, Optional

from pydantic import BaseModel, Field, model_validator


# Wall-object ids the door convention places in lieu of a footprint.
DOORFRAME = 1
DOOR = 2

_DOOR_TYPE = re.compile(r"door$", re.IGNORECASE)


class Position(NamedTuple):
    """World tile coordinate. Floors are encoded in ``y`` (see ``floor_offset``)."""

    x: int
    y: int


class StepDelta(NamedTuple):
    """Single-step movement offset in world tiles."""

    dx: int
    dy: int


class UnknownDefinitionError(KeyError):
    """Raised when an object, wall-object or tile id is absent from its table."""

    def __init__(self, kind: str, definition_id: int, table_size: int) -> None:
        self.kind = kind
        self.definition_id = definition_id
        self.table_size = table_size
        message = (
            f"Unknown {kind} definition id {definition_id} "
            f"(table holds ids 0..{table_size - 1}).\n"
            "Remediation tips:\n"
            "  - Check the placement/landscape data was exported from the same "
            "config revision as the definition tables\n"
            "  - Tile overlay and wall ids in landscape data are 1-based; "
            "placement ids are 0-based"
        )
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError repr-quotes its message otherwise
        return str(self.args[0])


# ============================================================================
# Definition Tables
# ============================================================================


class TileDefinition(BaseModel):
    """Terrain overlay definition."""

    name: Optional[str] = None
    blocked: bool = False


class ObjectDefinition(BaseModel):
    """Scenery object definition.

    ``type`` drives how a placement affects the grid:

    - ``"unblocked"``: no effect
    - anything ending in ``"door"`` (``"open-door"``, ``"closed-door"``, ...):
      placed as a run of door wall-objects
    - anything else: blocks a ``width x height`` tile footprint
    """

    name: Optional[str] = None
    type: str = Field(..., description="Blocking behaviour tag")
    width: int = Field(1, ge=1, description="Footprint width in tiles (unrotated)")
    height: int = Field(1, ge=1, description="Footprint height in tiles (unrotated)")

    @property
    def is_unblocked(self) -> bool:
        return self.type == "unblocked"

    @property
    def is_door(self) -> bool:
        return bool(_DOOR_TYPE.search(self.type))

    @property
    def is_closed_door(self) -> bool:
        return self.type == "closed-door"


class WallObjectDefinition(BaseModel):
    """Wall, fence, door or boundary decoration definition."""

    name: Optional[str] = None
    blocked: bool = False


class WorldDefinitions(BaseModel):
    """All definition tables the pathfinder consults, indexed by id."""

    objects: List[ObjectDefinition] = Field(default_factory=list)
    wall_objects: List[WallObjectDefinition] = Field(default_factory=list)
    tiles: List[TileDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_door_wall_objects(self) -> "WorldDefinitions":
        # Door objects are re-expressed as DOOR/DOORFRAME wall-objects, so
        # those ids must resolve before any placement happens.
        if any(obj.is_door for obj in self.objects):
            missing = [
                wall_id
                for wall_id in (DOORFRAME, DOOR)
                if wall_id >= len(self.wall_objects)
            ]
            if missing:
                raise ValueError(
                    "door objects are defined but wall-object ids "
                    f"{missing} (DOORFRAME=1, DOOR=2) are missing"
                )
        return self

    def object(self, object_id: int) -> ObjectDefinition:
        return _lookup(self.objects, "object", object_id)

    def wall_object(self, wall_object_id: int) -> WallObjectDefinition:
        return _lookup(self.wall_objects, "wall-object", wall_object_id)

    def tile(self, tile_id: int) -> TileDefinition:
        return _lookup(self.tiles, "tile", tile_id)


def _lookup(table: list, kind: str, definition_id: int):
    if 0 <= definition_id < len(table):
        return table[definition_id]
    raise UnknownDefinitionError(kind, definition_id, len(table))


# ============================================================================
# Placements
# ============================================================================


class ObjectPlacement(BaseModel):
    """A scenery object placed at a world tile with an 8-way direction."""

    id: int = Field(..., ge=0)
    x: int
    y: int
    direction: int = Field(0, ge=0, le=7)


class WallObjectPlacement(BaseModel):
    """A wall-object placed at a world tile.

    ``direction`` is the wall orientation: 0 horizontal ``|``, 1 vertical
    ``_``, 2 diagonal ``\\``, 3 diagonal ``/``.
    """

    id: int = Field(..., ge=0)
    x: int
    y: int
    direction: int = Field(0, ge=0, le=3)
