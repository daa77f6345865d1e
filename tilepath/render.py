"""Debug rendering of an obstacle grid and an optional world path.

Blocked cells are drawn white, free cells black, and every tile on the path
gets its 2x2 block painted red. Requires Pillow (``pip install tilepath[render]``).
"""

from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from .grid.constants import TILE_SIZE
from .grid.coords import CoordinateMapper
from .grid.obstacles import ObstacleGrid
from .schemas import Position

try:  # Optional dependency (only needed for debug rendering)
    from PIL import Image
except ImportError:  # pragma: no cover - Pillow may not be installed for core usage
    Image = None


BLOCKED_COLOR = (255, 255, 255)
FREE_COLOR = (0, 0, 0)
PATH_COLOR = (255, 0, 0)


class RenderUnavailableError(ImportError):
    """Raised when rendering is requested but Pillow is not installed."""

    def __init__(self) -> None:
        super().__init__(
            "Pillow is required for grid rendering. "
            "Install with `pip install tilepath[render]`."
        )


def rendering_available() -> bool:
    return Image is not None


def render_grid(grid: ObstacleGrid, path: Optional[Iterable[Position]] = None):
    """Return a ``PIL.Image.Image`` of ``grid`` (one pixel per cell)."""
    if not rendering_available():
        raise RenderUnavailableError()

    # cells is indexed [x, y]; images are [row, column].
    pixels = np.zeros((grid.height, grid.width, 3), dtype=np.uint8)
    pixels[:, :] = FREE_COLOR
    pixels[grid.cells.T] = BLOCKED_COLOR

    if path:
        mapper = CoordinateMapper(grid.width)
        for x, y in path:
            gx, gy = mapper.world_to_grid(x, y)
            if not grid.in_bounds(gx, gy):
                continue
            pixels[gy:gy + TILE_SIZE, gx:gx + TILE_SIZE] = PATH_COLOR

    return Image.fromarray(pixels)
