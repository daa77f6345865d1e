"""
Legends Guild Route

Loads an exported world (definitions, landscape, object and wall-object
placements) from TILEPATH_DATA_DIR, flips a couple of doors, and walks from
the west coast to the Legends Guild.

Expected files in the data directory:
    definitions.json, landscape.json, object-locs.json.gz, wallObject-locs.json

Run: uv run python examples/legends_route/run.py
"""

import asyncio
import os

from tilepath import PathFinder, WorldLoader
from tilepath.config import Config
from tilepath.logging_utils import log_success

START = (126, 655)
LEGENDS_GUILD = (513, 552)

# Taverley gate, replaced by its open counterpart
OPEN_GATE = {"id": 58, "x": 341, "y": 487, "direction": 4}

# Door in Gertrude's house; wall-object 1 instead of 2 would reopen it
CLOSED_DOOR = {"id": 2, "x": 163, "y": 513, "direction": 1}


async def main():
    print(Config.display())

    loader = WorldLoader()
    pathfinder = PathFinder(loader.load_definitions(), loader.load_landscape())
    pathfinder.place_objects(loader.load_object_placements())
    pathfinder.place_wall_objects(loader.load_wall_object_placements())

    pathfinder.place_object(OPEN_GATE)
    pathfinder.place_wall_object(CLOSED_DOOR)

    pathfinder.start()
    try:
        path = await pathfinder.find_path(START, LEGENDS_GUILD)
    finally:
        pathfinder.stop()

    log_success(f'Found path to legends guild: {len(path)} steps')

    output = os.getenv('TILEPATH_RENDER_TO')
    if output:
        pathfinder.render(path).save(output)
        print(f'Wrote {output}')


if __name__ == '__main__':
    asyncio.run(main())
