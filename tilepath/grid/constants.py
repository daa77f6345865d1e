"""Geometry constants shared by the grid modules."""

# Tiles per region edge
REGION_SIZE = 48

# Grid cells per tile edge
TILE_SIZE = 2

# Floor spacing. Each extra floor adds this many grid rows to the grid height
# and this many tile rows to the floor's world y offset.
GAP_SIZE = 80

# Wall-object orientations
WALL_HORIZONTAL = 0  # |
WALL_VERTICAL = 1    # _
WALL_DIAGONAL_BACKSLASH = 2
WALL_DIAGONAL_SLASH = 3
