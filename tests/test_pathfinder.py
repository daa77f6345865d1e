"""End-to-end tests for the PathFinder facade."""

import asyncio

import pytest

from conftest import (
    CLOSED_DOOR,
    OPEN_DOOR,
    STONE_WALL,
    TREE,
    WATER,
    make_definitions,
    make_landscape,
    set_world_tile,
)
from tilepath import PathFinder, Position, UnknownDefinitionError
from tilepath.config import Config
from tilepath.grid import TileState, WallDescriptor


def make_pathfinder(landscape=None):
    return PathFinder(
        make_definitions(),
        landscape or make_landscape(),
        tick_rate=1,
        iterations_per_calculation=500,
    )


async def route(pathfinder, start, end):
    pathfinder.start()
    try:
        return await asyncio.wait_for(pathfinder.find_path(start, end), timeout=10)
    finally:
        pathfinder.stop()


def walled_landscape():
    """A stone wall along world x = 10, top to bottom of the region."""
    landscape = make_landscape()
    for y in range(48):
        set_world_tile(
            landscape, 10, y, TileState(wall=WallDescriptor(vertical=STONE_WALL + 1))
        )
    return landscape


@pytest.mark.asyncio
async def test_straight_route():
    pathfinder = make_pathfinder()

    steps = await route(pathfinder, Position(5, 5), Position(10, 5))

    assert steps == [(6, 5), (7, 5), (8, 5), (9, 5), (10, 5)]
    assert pathfinder.paths_remaining == 0


@pytest.mark.asyncio
async def test_diagonal_route_is_a_chain_of_single_steps():
    pathfinder = make_pathfinder()

    steps = await route(pathfinder, (5, 5), (8, 8))

    assert steps[-1] == (8, 8)
    previous = (5, 5)
    for step in steps:
        assert max(abs(step[0] - previous[0]), abs(step[1] - previous[1])) == 1
        previous = step


@pytest.mark.asyncio
async def test_route_to_own_tile_is_empty():
    pathfinder = make_pathfinder()

    assert await route(pathfinder, (7, 7), (7, 7)) == []


@pytest.mark.asyncio
async def test_route_to_blocked_tile_is_empty():
    landscape = make_landscape()
    set_world_tile(landscape, 12, 5, TileState(overlay=WATER))
    pathfinder = make_pathfinder(landscape)

    assert await route(pathfinder, (5, 5), (12, 5)) == []


@pytest.mark.asyncio
async def test_enclosed_destination_is_unreachable():
    pathfinder = make_pathfinder()
    pathfinder.place_objects(
        {"id": TREE, "x": 10 + dx, "y": 10 + dy, "direction": 0}
        for dx in (-1, 0, 1)
        for dy in (-1, 0, 1)
        if (dx, dy) != (0, 0)
    )

    assert await route(pathfinder, (3, 3), (10, 10)) == []
    assert await route(pathfinder, (30, 25), (10, 10)) == []


@pytest.mark.asyncio
async def test_search_error_resolves_empty_and_logs(capsys):
    pathfinder = make_pathfinder()

    def expand(query):
        raise RuntimeError("corrupt frontier")

    pathfinder.engine._expand = expand

    assert await route(pathfinder, (5, 5), (8, 5)) == []
    output = capsys.readouterr().out
    assert "[!]" in output
    assert "corrupt frontier" in output

    # The next query searches normally again.
    del pathfinder.engine._expand
    assert await route(pathfinder, (5, 5), (8, 5)) == [(6, 5), (7, 5), (8, 5)]


@pytest.mark.asyncio
async def test_route_avoids_placed_objects():
    pathfinder = make_pathfinder()
    pathfinder.place_object({"id": TREE, "x": 8, "y": 5})

    steps = await route(pathfinder, (5, 5), (10, 5))

    assert steps[-1] == (10, 5)
    assert (8, 5) not in steps


@pytest.mark.asyncio
async def test_doors_open_and_close_routes():
    pathfinder = make_pathfinder(walled_landscape())
    pathfinder.place_object({"id": CLOSED_DOOR, "x": 10, "y": 20, "direction": 0})

    assert await route(pathfinder, (5, 20), (15, 20)) == []

    pathfinder.place_object({"id": OPEN_DOOR, "x": 10, "y": 20, "direction": 0})

    assert await route(pathfinder, (5, 20), (15, 20)) == [
        (x, 20) for x in range(6, 16)
    ]


@pytest.mark.asyncio
async def test_cross_floor_route_is_empty_without_searching():
    pathfinder = make_pathfinder(make_landscape(depth=2))
    upper = pathfinder.mapper.floor_offset(1)

    # No scheduler running: the answer must not depend on the search.
    steps = await asyncio.wait_for(pathfinder.find_path((5, 5), (5, upper + 5)), 1)

    assert steps == []
    assert pathfinder.paths_remaining == 0


@pytest.mark.asyncio
async def test_upper_floor_route():
    pathfinder = make_pathfinder(make_landscape(depth=2))
    upper = pathfinder.mapper.floor_offset(1)

    steps = await route(pathfinder, (5, upper + 5), (5, upper + 8))

    assert steps == [(5, upper + 6), (5, upper + 7), (5, upper + 8)]


@pytest.mark.asyncio
async def test_concurrent_queries_all_resolve():
    pathfinder = make_pathfinder()
    pathfinder.start()
    try:
        results = await asyncio.wait_for(
            asyncio.gather(
                pathfinder.find_path((5, 5), (40, 40)),
                pathfinder.find_path((5, 5), (6, 5)),
                pathfinder.find_path((20, 20), (20, 30)),
            ),
            timeout=10,
        )
    finally:
        pathfinder.stop()

    long_route, short_route, straight = results
    assert long_route[-1] == (40, 40)
    assert short_route == [(6, 5)]
    assert straight == [(20, y) for y in range(21, 31)]


@pytest.mark.asyncio
async def test_query_waits_while_stopped():
    pathfinder = make_pathfinder()
    task = asyncio.ensure_future(pathfinder.find_path((5, 5), (10, 5)))
    await asyncio.sleep(0.01)

    assert not task.done()
    assert pathfinder.paths_remaining == 1

    pathfinder.start()
    try:
        assert await asyncio.wait_for(task, timeout=10)
    finally:
        pathfinder.stop()


@pytest.mark.asyncio
async def test_routes_are_deterministic():
    first = await route(make_pathfinder(), (5, 5), (30, 17))
    second = await route(make_pathfinder(), (5, 5), (30, 17))

    assert first == second
    assert first[-1] == (30, 17)


def test_is_valid_step_and_line_of_sight():
    pathfinder = make_pathfinder()
    pathfinder.place_object({"id": TREE, "x": 10, "y": 10, "direction": 0})

    assert pathfinder.is_valid_step((9, 10), (1, 0)) is False
    assert pathfinder.is_valid_step((9, 9), (1, 0)) is True
    assert list(pathfinder.line_of_sight((0, 0), (3, 0))) == [
        (0, 0),
        (1, 0),
        (2, 0),
        (3, 0),
    ]


def test_wall_object_dict_placement():
    pathfinder = make_pathfinder()
    pathfinder.place_wall_objects(
        [{"id": STONE_WALL, "x": 10, "y": 10, "direction": 1}]
    )

    assert pathfinder.is_valid_step((9, 10), (1, 0)) is False


def test_unknown_object_id_raises():
    pathfinder = make_pathfinder()

    with pytest.raises(UnknownDefinitionError):
        pathfinder.place_object({"id": 42, "x": 1, "y": 1})


def test_invalid_config_is_rejected(monkeypatch):
    monkeypatch.setattr(Config, "TICK_RATE_MS", 0)

    with pytest.raises(ValueError, match="TILEPATH_TICK_RATE_MS"):
        make_pathfinder()


def test_start_without_event_loop_raises():
    pathfinder = make_pathfinder()

    with pytest.raises(RuntimeError):
        pathfinder.start()

    assert not pathfinder.is_running
