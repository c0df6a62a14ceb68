"""
Placement solver tests
Run with: pytest backend/test_placement.py
"""

import pytest

from canvasgen.ir.geometry import BoundingBox, Geometry, Viewport
from canvasgen.placement import (
    GRID_SIZE,
    PlacementRequest,
    PlacementSolver,
    bounding_box,
    has_overlap,
    snap_to_grid,
)


VIEWPORT = Viewport(scroll_x=0, scroll_y=0, zoom_value=1, width=1000, height=800)


@pytest.fixture
def solver():
    return PlacementSolver()


# -------------------------
# UTILITIES
# -------------------------

@pytest.mark.parametrize("value,expected", [
    (0, 0), (24, 0), (25, 50), (26, 50), (49, 50), (75, 100),
    (-24, 0), (-25, -50), (-26, -50), (-74, -50), (-76, -100),
])
def test_snap_to_grid(value, expected):
    assert snap_to_grid(value) == expected


@pytest.mark.parametrize("value", [-137.5, -26, -1, 0, 3, 24.9, 25, 1234.5])
def test_snap_is_idempotent_and_on_grid(value):
    snapped = snap_to_grid(value)
    assert snap_to_grid(snapped) == snapped
    assert snapped % GRID_SIZE == 0


def test_bounding_box_empty_is_none():
    assert bounding_box([]) is None
    assert bounding_box([None]) is None


def test_bounding_box_single():
    box = bounding_box([Geometry(x=100, y=200, width=150, height=100)])
    assert box == BoundingBox(min_x=100, min_y=200, max_x=250, max_y=300, width=150, height=100)


def test_bounding_box_many():
    box = bounding_box([
        Geometry(x=0, y=0, width=10, height=10),
        Geometry(x=-50, y=20, width=10, height=30),
    ])
    assert (box.min_x, box.min_y, box.max_x, box.max_y) == (-50, 0, 10, 50)


def test_has_overlap_respects_padding():
    existing = [Geometry(x=0, y=0, width=100, height=100)]
    # 30 units to the right of the existing element
    assert not has_overlap(existing, 130, 0, 50, 50, padding=20)
    assert has_overlap(existing, 130, 0, 50, 50, padding=40)


@pytest.mark.parametrize("x,y", [(110, 0), (0, 125), (-70, -70), (300, 300), (50, 50)])
def test_has_overlap_is_monotonic_in_padding(x, y):
    existing = [Geometry(x=0, y=0, width=100, height=100)]
    results = [has_overlap(existing, x, y, 50, 50, p) for p in (0, 10, 20, 40, 80, 160)]
    # once True, stays True
    first_true = results.index(True) if True in results else len(results)
    assert all(results[first_true:])


def test_negative_geometry_rejected():
    with pytest.raises(ValueError):
        Geometry(x=0, y=0, width=-1, height=10)


# -------------------------
# VIEWPORT CENTER
# -------------------------

def test_viewport_center_without_overlap_avoidance(solver):
    request = PlacementRequest(width=200, height=100, avoid_overlap=False)
    result = solver.solve([], VIEWPORT, request)
    assert (result.x, result.y) == (400, 350)


def test_viewport_center_accounts_for_scroll_and_zoom(solver):
    viewport = Viewport(scroll_x=-500, scroll_y=100, zoom_value=2, width=1000, height=800)
    request = PlacementRequest(width=100, height=100, avoid_overlap=False)
    result = solver.solve([], viewport, request)
    # center = (500 + 250, -100 + 200)
    assert (result.x, result.y) == (700, 50)


def test_sequential_viewport_center_placements_do_not_overlap(solver):
    request = PlacementRequest(width=200, height=100, avoid_overlap=True)

    first = solver.solve([], VIEWPORT, request)
    placed = [Geometry(x=first.x, y=first.y, width=200, height=100)]
    second = solver.solve(placed, VIEWPORT, request)

    assert (first.x, first.y) != (second.x, second.y)
    assert not has_overlap(placed, second.x, second.y, 200, 100, padding=20)


def test_nearest_free_position_falls_back_to_step_offset():
    solver = PlacementSolver(max_attempts=3)
    huge = [Geometry(x=-10000, y=-10000, width=20000, height=20000)]
    result = solver.nearest_free_position(huge, (0, 0), 10, 10, 20)
    assert (result.x, result.y) == (50, 50)


# -------------------------
# GRID
# -------------------------

def test_grid_snaps_preferred_point(solver):
    request = PlacementRequest(width=40, height=40, strategy="grid", avoid_overlap=False, preferred_point=(74, 26))
    result = solver.solve([], VIEWPORT, request)
    assert (result.x, result.y) == (50, 50)


def test_grid_spirals_to_first_free_cell(solver):
    existing = [Geometry(x=0, y=0, width=40, height=40)]
    request = PlacementRequest(width=40, height=40, strategy="grid", padding=0)
    result = solver.solve(existing, VIEWPORT, request)
    assert (result.x, result.y) == (50, 0)
    assert result.x % GRID_SIZE == 0 and result.y % GRID_SIZE == 0


def test_grid_spiral_order_is_right_down_left(solver):
    existing = [
        Geometry(x=0, y=0, width=40, height=40),
        Geometry(x=50, y=0, width=40, height=40),
        Geometry(x=50, y=50, width=40, height=40),
    ]
    request = PlacementRequest(width=40, height=40, strategy="grid", padding=0)
    result = solver.solve(existing, VIEWPORT, request)
    # (0,0) -> right (50,0) -> down (50,50) -> left (0,50)
    assert (result.x, result.y) == (0, 50)


def test_grid_spiral_step_grows_after_four_moves(solver):
    existing = [
        Geometry(x=0, y=0, width=40, height=40),
        Geometry(x=50, y=0, width=40, height=40),
        Geometry(x=50, y=50, width=40, height=40),
        Geometry(x=0, y=50, width=40, height=40),
    ]
    request = PlacementRequest(width=40, height=40, strategy="grid", padding=0)
    result = solver.solve(existing, VIEWPORT, request)
    # up returns to (0,0), then the next move right is 100
    assert (result.x, result.y) == (100, 0)


@pytest.mark.parametrize("max_attempts,expected", [(4, (0, 0)), (6, (100, 100)), (50, (650, 650))])
def test_grid_exhaustion_returns_last_cell(max_attempts, expected):
    solver = PlacementSolver(max_attempts=max_attempts)
    existing = [Geometry(x=-100000, y=-100000, width=200000, height=200000)]
    request = PlacementRequest(width=40, height=40, strategy="grid")
    result = solver.solve(existing, VIEWPORT, request)
    assert (result.x, result.y) == expected


# -------------------------
# FLOW
# -------------------------

def test_flow_on_empty_canvas(solver):
    request = PlacementRequest(width=100, height=50, strategy="flow", padding=20)
    result = solver.solve([], VIEWPORT, request)
    assert (result.x, result.y) == (20, 20)


def test_flow_places_right_of_rightmost(solver):
    existing = [Geometry(x=20, y=20, width=200, height=80)]
    request = PlacementRequest(width=100, height=50, strategy="flow", padding=20)
    result = solver.solve(existing, VIEWPORT, request)
    assert result.x >= 240
    assert result.y == 20


def test_flow_wraps_past_max_width(solver):
    existing = [
        Geometry(x=20, y=20, width=200, height=300),
        Geometry(x=1700, y=20, width=200, height=80),
    ]
    request = PlacementRequest(width=200, height=50, strategy="flow", padding=20, avoid_overlap=False)
    result = solver.solve(existing, VIEWPORT, request)
    assert (result.x, result.y) == (20, 340)


# -------------------------
# PROXIMITY
# -------------------------

def test_proximity_prefers_right_of_anchor(solver):
    anchor = Geometry(x=0, y=0, width=100, height=100)
    request = PlacementRequest(width=50, height=50, strategy="proximity", anchor=anchor)
    result = solver.solve([anchor], VIEWPORT, request)
    assert (result.x, result.y) == (120, 0)


def test_proximity_tries_below_when_right_blocked(solver):
    anchor = Geometry(x=0, y=0, width=100, height=100)
    blocker = Geometry(x=120, y=0, width=50, height=50)
    request = PlacementRequest(width=50, height=50, strategy="proximity", anchor=anchor)
    result = solver.solve([anchor, blocker], VIEWPORT, request)
    assert (result.x, result.y) == (0, 120)


def test_proximity_without_anchor_uses_flow(solver):
    request = PlacementRequest(width=50, height=50, strategy="proximity", padding=20)
    result = solver.solve([], VIEWPORT, request)
    assert (result.x, result.y) == (20, 20)


def test_unknown_strategy_falls_back_to_viewport_center(solver):
    request = PlacementRequest(width=200, height=100, strategy="spiral", avoid_overlap=False)
    result = solver.solve([], VIEWPORT, request)
    assert (result.x, result.y) == (400, 350)


ANCHOR = Geometry(x=0, y=0, width=100, height=100)
RIGHT_SLOT = Geometry(x=120, y=0, width=50, height=50)
BELOW_SLOT = Geometry(x=0, y=120, width=50, height=50)
LEFT_SLOT = Geometry(x=-70, y=0, width=50, height=50)
ABOVE_SLOT = Geometry(x=0, y=-70, width=50, height=50)
DIAGONAL_SLOT = Geometry(x=120, y=120, width=50, height=50)


@pytest.mark.parametrize("blocked,expected", [
    ([RIGHT_SLOT, BELOW_SLOT], (-70, 0)),
    ([RIGHT_SLOT, BELOW_SLOT, LEFT_SLOT], (0, -70)),
    ([RIGHT_SLOT, BELOW_SLOT, LEFT_SLOT, ABOVE_SLOT], (120, 120)),
])
def test_proximity_slot_priority(solver, blocked, expected):
    request = PlacementRequest(width=50, height=50, strategy="proximity", anchor=ANCHOR, padding=20)
    result = solver.solve([ANCHOR] + blocked, VIEWPORT, request)
    assert (result.x, result.y) == expected


def test_proximity_falls_back_to_flow_when_all_slots_blocked(solver):
    existing = [ANCHOR, RIGHT_SLOT, BELOW_SLOT, LEFT_SLOT, ABOVE_SLOT, DIAGONAL_SLOT]
    request = PlacementRequest(width=50, height=50, strategy="proximity", anchor=ANCHOR, padding=20)
    result = solver.solve(existing, VIEWPORT, request)
    # flow: right of the rightmost element (RIGHT_SLOT ends at 170), on its row
    assert (result.x, result.y) == (190, 0)
