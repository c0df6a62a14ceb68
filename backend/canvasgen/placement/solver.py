"""
Placement Solver - picks a top-left corner for new content on the canvas.

Strategies:
- viewport-center: centered in the visible area, nudged off existing content
- grid: snapped to GRID_SIZE cells, spiralling outward when occupied
- flow: left-to-right rows, wrapping at MAX_FLOW_WIDTH
- proximity: next to an anchor element, falling back to flow

Every call takes the existing geometry explicitly. The solver keeps no
canvas state between calls, so one instance can serve any number of
independent canvases. Callers that share a mutable canvas must serialize
snapshot capture themselves.
"""

import logging
from typing import List, Sequence, Tuple

from canvasgen.ir.geometry import Geometry, Viewport
from canvasgen.placement.geometry import has_overlap, snap_to_grid
from canvasgen.placement.types import (
    DEFAULT_PADDING,
    GRID_SIZE,
    MAX_ATTEMPTS,
    MAX_FLOW_WIDTH,
    SEARCH_STEP,
    STRATEGIES,
    PlacementRequest,
    PlacementResult,
)

logger = logging.getLogger(__name__)


class PlacementSolver:
    """
    Usage:
        solver = PlacementSolver()
        result = solver.solve(snapshot.existing_geometries, snapshot.viewport, request)
    """

    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        max_attempts: int = MAX_ATTEMPTS,
        search_step: int = SEARCH_STEP,
        max_flow_width: float = MAX_FLOW_WIDTH,
    ):
        self.grid_size = grid_size
        self.max_attempts = max_attempts
        self.search_step = search_step
        self.max_flow_width = max_flow_width

    def solve(
        self,
        existing: Sequence[Geometry],
        viewport: Viewport,
        request: PlacementRequest,
    ) -> PlacementResult:
        padding = request.padding if request.padding is not None else DEFAULT_PADDING
        strategy = request.strategy or "viewport-center"

        if strategy not in STRATEGIES:
            logger.warning("Unknown placement strategy %r, using viewport-center", strategy)
            strategy = "viewport-center"

        if strategy == "grid":
            return self._grid(existing, request, padding)
        if strategy == "flow":
            return self._flow(existing, request, padding)
        if strategy == "proximity":
            return self._proximity(existing, request, padding)
        return self._viewport_center(existing, viewport, request, padding)

    # -------------------------
    # STRATEGIES
    # -------------------------

    def _viewport_center(
        self,
        existing: Sequence[Geometry],
        viewport: Viewport,
        request: PlacementRequest,
        padding: float,
    ) -> PlacementResult:
        center_x = -viewport.scroll_x + viewport.width / 2 / viewport.zoom_value
        center_y = -viewport.scroll_y + viewport.height / 2 / viewport.zoom_value

        x = center_x - request.width / 2
        y = center_y - request.height / 2

        if request.avoid_overlap:
            return self.nearest_free_position(
                existing, (x, y), request.width, request.height, padding
            )
        return PlacementResult(x, y)

    def _grid(
        self,
        existing: Sequence[Geometry],
        request: PlacementRequest,
        padding: float,
    ) -> PlacementResult:
        start_x, start_y = request.preferred_point or (0, 0)
        x = snap_to_grid(start_x, self.grid_size)
        y = snap_to_grid(start_y, self.grid_size)

        if not request.avoid_overlap:
            return PlacementResult(x, y)

        for attempt in range(self.max_attempts):
            if not has_overlap(existing, x, y, request.width, request.height, padding):
                return PlacementResult(x, y)

            # spiral: right, down, left, up; step grows every 4 attempts
            offset = self.grid_size * (attempt // 4 + 1)
            direction = attempt % 4
            if direction == 0:
                x += offset
            elif direction == 1:
                y += offset
            elif direction == 2:
                x -= offset
            else:
                y -= offset

        logger.debug("Grid placement exhausted after %d attempts at (%s, %s)", self.max_attempts, x, y)
        return PlacementResult(x, y)

    def _flow(
        self,
        existing: Sequence[Geometry],
        request: PlacementRequest,
        padding: float,
    ) -> PlacementResult:
        if not existing:
            return PlacementResult(padding, padding)

        rightmost = max(existing, key=lambda g: g.right)
        lowest_bottom = max(g.bottom for g in existing)

        x = rightmost.right + padding
        y = rightmost.y

        if x + request.width > self.max_flow_width:
            x = padding
            y = lowest_bottom + padding

        if request.avoid_overlap:
            return self.nearest_free_position(
                existing, (x, y), request.width, request.height, padding
            )
        return PlacementResult(x, y)

    def _proximity(
        self,
        existing: Sequence[Geometry],
        request: PlacementRequest,
        padding: float,
    ) -> PlacementResult:
        anchor = request.anchor
        if anchor is None:
            return self._flow(existing, request, padding)

        for x, y in self.proximity_candidates(anchor, request.width, request.height, padding):
            if not has_overlap(existing, x, y, request.width, request.height, padding):
                return PlacementResult(x, y)

        logger.debug("No free slot around anchor at (%s, %s), falling back to flow", anchor.x, anchor.y)
        return self._flow(existing, request, padding)

    # -------------------------
    # SEARCH HELPERS
    # -------------------------

    @staticmethod
    def proximity_candidates(
        anchor: Geometry, width: float, height: float, padding: float
    ) -> List[Tuple[float, float]]:
        """Right, below, left, above, diagonal bottom-right, in that order."""
        return [
            (anchor.x + anchor.width + padding, anchor.y),
            (anchor.x, anchor.y + anchor.height + padding),
            (anchor.x - width - padding, anchor.y),
            (anchor.x, anchor.y - height - padding),
            (anchor.x + anchor.width + padding, anchor.y + anchor.height + padding),
        ]

    @staticmethod
    def ring_positions(center_x: float, center_y: float, radius: float) -> List[Tuple[float, float]]:
        return [
            (center_x + radius, center_y),
            (center_x, center_y + radius),
            (center_x - radius, center_y),
            (center_x, center_y - radius),
            (center_x + radius, center_y + radius),
            (center_x - radius, center_y + radius),
            (center_x + radius, center_y - radius),
            (center_x - radius, center_y - radius),
        ]

    def nearest_free_position(
        self,
        existing: Sequence[Geometry],
        preferred: Tuple[float, float],
        width: float,
        height: float,
        padding: float,
    ) -> PlacementResult:
        """
        Probe rings of 8 points around `preferred` until one is free.

        Always terminates. If every ring is blocked the result is offset by
        one step on both axes and may still overlap.
        """
        px, py = preferred
        if not has_overlap(existing, px, py, width, height, padding):
            return PlacementResult(px, py)

        for radius in range(1, self.max_attempts):
            for x, y in self.ring_positions(px, py, radius * self.search_step):
                if not has_overlap(existing, x, y, width, height, padding):
                    return PlacementResult(x, y)

        logger.debug("Nearest-free search exhausted around (%s, %s)", px, py)
        return PlacementResult(px + self.search_step, py + self.search_step)
