# Placement module
# Chooses where new content lands relative to what is already on the canvas

from canvasgen.placement.types import (
    GRID_SIZE,
    DEFAULT_PADDING,
    STRATEGIES,
    PlacementHints,
    PlacementRequest,
    PlacementResult,
)
from canvasgen.placement.geometry import bounding_box, has_overlap, snap_to_grid
from canvasgen.placement.solver import PlacementSolver

__all__ = [
    "GRID_SIZE",
    "DEFAULT_PADDING",
    "STRATEGIES",
    "PlacementHints",
    "PlacementRequest",
    "PlacementResult",
    "PlacementSolver",
    "bounding_box",
    "has_overlap",
    "snap_to_grid",
]
