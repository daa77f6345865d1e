"""
World data loading for JSON exports of the game's definition and map archives.

This module provides WorldLoader for turning exported data files into the
validated models the pathfinder consumes:
- Definition tables (objects, wall-objects, tile overlays)
- Landscape geometry (region bounds, floor count, loaded regions)
- Object and wall-object placement lists

Parsing the binary archives themselves is left to the exporter; WorldLoader
only reads its JSON output. Any file may be gzip-compressed (``.json.gz``),
which is how the large placement dumps are usually shipped.

Directory structure:
- Default: ``TILEPATH_DATA_DIR`` or ``{PROJECT_ROOT}/data``
- Files: ``{name}.json`` or ``{name}.json.gz``

Usage:
    loader = WorldLoader()
    pathfinder = PathFinder(loader.load_definitions(), loader.load_landscape())
    pathfinder.place_objects(loader.load_object_placements())
    pathfinder.place_wall_objects(loader.load_wall_object_placements())
"""

import gzip
import json
from pathlib import Path
from typing import Any, List, Optional

from .config import Config
from .grid.schemas import Landscape
from .logging_utils import log_deterministic
from .schemas import ObjectPlacement, WallObjectPlacement, WorldDefinitions


class WorldLoader:
    """Load and validate exported world data from a directory.

    Validation happens here, once, so malformed tables fail at load time:
    pydantic raises ``ValidationError`` for missing or mistyped fields, and
    ``WorldDefinitions`` rejects door objects without DOOR/DOORFRAME entries.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """Initialize world loader.

        Args:
            data_dir: Directory containing exported files.
                      Defaults to Config.DATA_DIR
        """
        self.data_dir = Path(data_dir) if data_dir is not None else Config.DATA_DIR

    def load_definitions(self, name: str = "definitions") -> WorldDefinitions:
        """Load ``{"objects": [...], "wall_objects": [...], "tiles": [...]}``."""
        definitions = WorldDefinitions.model_validate(self._read(name))
        log_deterministic(
            f"[Loader] {len(definitions.objects)} objects, "
            f"{len(definitions.wall_objects)} wall-objects, "
            f"{len(definitions.tiles)} tiles from '{name}'"
        )
        return definitions

    def load_landscape(self, name: str = "landscape") -> Landscape:
        landscape = Landscape.model_validate(self._read(name))
        log_deterministic(
            f"[Loader] {len(landscape.regions)} regions "
            f"({landscape.regions_x}x{landscape.regions_y}x{landscape.depth}) from '{name}'"
        )
        return landscape

    def load_object_placements(self, name: str = "object-locs") -> List[ObjectPlacement]:
        return [ObjectPlacement.model_validate(item) for item in self._read_list(name)]

    def load_wall_object_placements(
        self, name: str = "wallObject-locs"
    ) -> List[WallObjectPlacement]:
        return [
            WallObjectPlacement.model_validate(item) for item in self._read_list(name)
        ]

    def resolve(self, name: str) -> Path:
        """Return the path for ``name``, trying ``.json`` then ``.json.gz``.

        Raises:
            FileNotFoundError: If neither file exists
        """
        candidates = [self.data_dir / name]
        if not name.endswith((".json", ".gz")):
            candidates = [
                self.data_dir / f"{name}.json",
                self.data_dir / f"{name}.json.gz",
            ]

        for candidate in candidates:
            if candidate.exists():
                return candidate

        tried = ", ".join(str(candidate) for candidate in candidates)
        raise FileNotFoundError(f"World data '{name}' not found (tried {tried})")

    def _read(self, name: str) -> Any:
        path = self.resolve(name)
        if path.suffix == ".gz":
            with gzip.open(path, "rt", encoding="utf-8") as handle:
                return json.load(handle)
        return json.loads(path.read_text(encoding="utf-8"))

    def _read_list(self, name: str) -> list:
        data = self._read(name)
        if not isinstance(data, list):
            raise ValueError(f"World data '{name}' must be a JSON list of placements")
        return data
