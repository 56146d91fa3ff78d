"""Paths and metaparameters for the project.

:author: Shay Hill
:created: 2026-10-19
"""

from pathlib import Path

# ===================================================================================
#   Paths
# ===================================================================================


RESOURCES = Path(__file__).parent / "resources"

COLORS_CSV = RESOURCES / "colors.csv"


# ===================================================================================
#   Metaparameters
# ===================================================================================

# control-point distance, as a fraction of the radius, for a quarter-circle bezier
BEZIER_KAPPA = 0.5522848

# outline vertices are pulled this far toward the center to land strokes on pixels
OUTLINE_OFFSET = 0.5

# wedge arcs are sampled every WEDGE_STEP degrees for vertex comparison
WEDGE_STEP = 5

# pixel buffers are hashed in square tiles no wider than this
EQUALITY_TILE = 10000

# absolute tolerance when comparing vertex coordinates
VERTEX_TOLERANCE = 1e-6

# half-length of the pinhole crosshair and its two stroke widths (outer, inner)
PINHOLE_RADIUS = 5
PINHOLE_STROKES = ((1.5, (0, 0, 0)), (0.75, (255, 255, 255)))

# color catalogs whose Lab tables are kept for naming
NAMER_CACHE_SIZE = 8


# ===================================================================================
#   Text defaults
# ===================================================================================

DEFAULT_FONT_FACE = "Arial"
DEFAULT_FONT_SIZE = 12
