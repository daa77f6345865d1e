"""Tests for definition tables, geometry models and placements."""

import pytest
from pydantic import ValidationError

from conftest import make_definitions, make_landscape
from tilepath.grid import Landscape, Region, TileState
from tilepath.schemas import (
    DOOR,
    DOORFRAME,
    ObjectDefinition,
    ObjectPlacement,
    UnknownDefinitionError,
    WallObjectPlacement,
    WorldDefinitions,
)


def test_object_type_flags():
    assert ObjectDefinition(type="unblocked").is_unblocked
    assert ObjectDefinition(type="closed-door").is_closed_door
    assert ObjectDefinition(type="open-door").is_door
    assert ObjectDefinition(type="Closed-DOOR").is_door
    assert not ObjectDefinition(type="open-door").is_closed_door
    assert not ObjectDefinition(type="blocked").is_door
    assert not ObjectDefinition(type="doorway mat").is_door


def test_object_footprint_must_be_positive():
    with pytest.raises(ValidationError):
        ObjectDefinition(type="blocked", width=0)


def test_lookups_raise_named_error():
    definitions = make_definitions()

    assert definitions.wall_object(DOOR).blocked
    assert not definitions.wall_object(DOORFRAME).blocked

    with pytest.raises(UnknownDefinitionError) as excinfo:
        definitions.wall_object(17)

    error = excinfo.value
    assert isinstance(error, KeyError)
    assert (error.kind, error.definition_id, error.table_size) == ("wall-object", 17, 4)
    assert str(error).startswith("Unknown wall-object definition id 17")
    assert "Remediation tips" in str(error)

    with pytest.raises(UnknownDefinitionError):
        definitions.tile(-1)


def test_definitions_validate_from_plain_data():
    definitions = WorldDefinitions.model_validate(
        {
            "objects": [{"type": "blocked", "width": 2, "height": 3}],
            "wall_objects": [{"blocked": True}],
            "tiles": [{"blocked": False}],
        }
    )

    assert definitions.object(0).width == 2
    assert definitions.object(0).height == 3


def test_placement_direction_ranges():
    assert ObjectPlacement(id=1, x=0, y=0, direction=7).direction == 7
    assert WallObjectPlacement(id=1, x=0, y=0, direction=3).direction == 3

    with pytest.raises(ValidationError):
        ObjectPlacement(id=1, x=0, y=0, direction=8)
    with pytest.raises(ValidationError):
        WallObjectPlacement(id=1, x=0, y=0, direction=4)
    with pytest.raises(ValidationError):
        ObjectPlacement(id=-1, x=0, y=0)


def test_region_shape_is_validated():
    with pytest.raises(ValidationError):
        Region(x=0, y=0, tiles=[[TileState()] * 48] * 47)


def test_landscape_sector_lookup():
    landscape = make_landscape(regions_x=2, regions_y=2, depth=2, missing=[(1, 1, 1)])

    assert (landscape.regions_x, landscape.regions_y) == (2, 2)
    assert landscape.sector(0, 1, 1).z == 1
    assert landscape.sector(1, 1, 1) is None
    assert landscape.sector(5, 0, 0) is None


def test_landscape_from_plain_data_indexes_regions():
    landscape = Landscape.model_validate(
        {
            "min_region_x": 48,
            "max_region_x": 49,
            "min_region_y": 37,
            "max_region_y": 37,
            "depth": 1,
            "regions": [{"x": 49, "y": 37, "z": 0}],
        }
    )

    assert landscape.regions_x == 2
    assert landscape.sector(49, 37, 0) is not None
    assert landscape.sector(48, 37, 0) is None


def test_landscape_bounds_are_validated():
    with pytest.raises(ValidationError):
        Landscape(min_region_x=3, max_region_x=2, min_region_y=0, max_region_y=0)
