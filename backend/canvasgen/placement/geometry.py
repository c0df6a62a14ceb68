"""
Pure rectangle helpers shared by the placement solver and the pipeline.
"""

import math
from typing import Iterable, Optional

from canvasgen.ir.geometry import BoundingBox, Geometry
from canvasgen.placement.types import GRID_SIZE


def snap_to_grid(value: float, grid_size: int = GRID_SIZE) -> int:
    """
    Round to the nearest grid line, halves away from zero.

    snap(24) == 0, snap(25) == 50, snap(-26) == -50.
    """
    steps = math.floor(abs(value) / grid_size + 0.5)
    return int(math.copysign(steps, value)) * grid_size if steps else 0


def rects_overlap(
    x: float,
    y: float,
    width: float,
    height: float,
    other: Geometry,
    padding: float = 0,
) -> bool:
    return (
        x < other.x + other.width + padding
        and x + width + padding > other.x
        and y < other.y + other.height + padding
        and y + height + padding > other.y
    )


def has_overlap(
    geometries: Iterable[Geometry],
    x: float,
    y: float,
    width: float,
    height: float,
    padding: float,
) -> bool:
    """True if the candidate rectangle comes within `padding` of any geometry."""
    return any(rects_overlap(x, y, width, height, g, padding) for g in geometries)


def bounding_box(geometries: Iterable[Optional[Geometry]]) -> Optional[BoundingBox]:
    """Min/max over a geometry set. None for an empty set."""
    min_x = min_y = math.inf
    max_x = max_y = -math.inf

    for g in geometries:
        if g is None:
            continue
        min_x = min(min_x, g.x)
        min_y = min(min_y, g.y)
        max_x = max(max_x, g.right)
        max_y = max(max_y, g.bottom)

    if min_x == math.inf:
        return None

    return BoundingBox(
        min_x=min_x,
        min_y=min_y,
        max_x=max_x,
        max_y=max_y,
        width=max_x - min_x,
        height=max_y - min_y,
    )
