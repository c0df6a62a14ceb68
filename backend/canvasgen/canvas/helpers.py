"""
Helpers at the boundary with the host canvas.

Host elements arrive as loose mappings (`type`, `id`, `x`, `y`, `width`,
`height`, `text`, ...). They are converted to `Geometry` once here so the
placement code never deals with missing fields.
"""

import math
from collections import Counter
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple

from canvasgen.ir.geometry import CanvasSnapshot, Geometry, Viewport
from canvasgen.placement.geometry import rects_overlap
from canvasgen.visual.visual_schema import VisualElementGroup, element_to_dict

HostElement = Mapping[str, Any]


class CanvasHost(Protocol):
    """The slice of the host canvas the core consumes."""

    @property
    def elements(self) -> Sequence[HostElement]: ...

    @property
    def viewport(self) -> Mapping[str, Any]: ...

    def add_element(self, element: Dict[str, Any]) -> None: ...


# -------------------------
# CONVERSION
# -------------------------

def geometry_from_element(element: HostElement) -> Optional[Geometry]:
    if "x" not in element or "y" not in element:
        return None
    return Geometry(
        x=float(element["x"]),
        y=float(element["y"]),
        width=max(float(element.get("width") or 0), 0.0),
        height=max(float(element.get("height") or 0), 0.0),
    )


def viewport_from_app_state(app_state: Mapping[str, Any]) -> Viewport:
    zoom = app_state.get("zoom") or {}
    zoom_value = zoom.get("value", 1) if isinstance(zoom, Mapping) else zoom
    selected = app_state.get("selectedElementIds") or {}
    return Viewport(
        scroll_x=float(app_state.get("scrollX", 0)),
        scroll_y=float(app_state.get("scrollY", 0)),
        zoom_value=float(zoom_value or 1),
        width=float(app_state.get("width", 1000)),
        height=float(app_state.get("height", 800)),
        selected_element_ids=frozenset(k for k, v in selected.items() if v),
    )


def snapshot_from_host(elements: Iterable[HostElement], app_state: Mapping[str, Any]) -> CanvasSnapshot:
    geometries = tuple(
        g for g in (geometry_from_element(e) for e in elements if not e.get("isDeleted")) if g is not None
    )
    return CanvasSnapshot(existing_geometries=geometries, viewport=viewport_from_app_state(app_state))


def add_group_to_canvas(host: CanvasHost, group: VisualElementGroup) -> List[str]:
    """Insert members in order through the host mutator. Returns inserted ids."""
    inserted = []
    for member in group.members:
        data = element_to_dict(member)
        data.update({
            "version": 1,
            "isDeleted": False,
            "boundElements": None,
            "link": None,
            "locked": False,
        })
        host.add_element(data)
        inserted.append(member.id)
    return inserted


# -------------------------
# QUERIES
# -------------------------

def canvas_summary(elements: Sequence[HostElement], max_text_items: int = 5) -> str:
    """Short textual description of the canvas sent along with each provider call."""
    if not elements:
        return "Canvas context: Empty canvas"

    counts = Counter(e.get("type", "unknown") for e in elements)
    texts = [e["text"] for e in elements if e.get("type") == "text" and e.get("text")]

    lines = [f"Canvas context: {len(elements)} total elements"]
    lines.extend(f"- {count} {kind} element(s)" for kind, count in counts.items())

    if texts:
        lines.append("Text content on canvas:")
        lines.extend(f'  "{t}"' for t in texts[:max_text_items])
        if len(texts) > max_text_items:
            lines.append(f"  ... and {len(texts) - max_text_items} more")

    return "\n".join(lines)


def selected_elements(elements: Sequence[HostElement], viewport: Viewport) -> List[HostElement]:
    return [e for e in elements if e.get("id") in viewport.selected_element_ids]


def elements_by_type(elements: Sequence[HostElement], element_type: str) -> List[HostElement]:
    return [e for e in elements if e.get("type") == element_type]


def elements_with_text(elements: Sequence[HostElement], search: str) -> List[HostElement]:
    """Text elements whose text contains `search`, case-insensitive."""
    needle = search.lower()
    return [
        e for e in elements
        if e.get("type") == "text" and isinstance(e.get("text"), str) and needle in e["text"].lower()
    ]


def elements_in_area(elements: Sequence[HostElement], area: Geometry) -> List[HostElement]:
    found = []
    for element in elements:
        g = geometry_from_element(element)
        if g is None:
            continue
        if g.x < area.right and g.right > area.x and g.y < area.bottom and g.bottom > area.y:
            found.append(element)
    return found


def elements_overlap(a: HostElement, b: HostElement, padding: float = 0) -> bool:
    ga, gb = geometry_from_element(a), geometry_from_element(b)
    if ga is None or gb is None:
        return False
    return rects_overlap(ga.x, ga.y, ga.width, ga.height, gb, padding)


def distance_between(a: Geometry, b: Geometry) -> float:
    (ax, ay), (bx, by) = a.center, b.center
    return math.hypot(bx - ax, by - ay)


def nearest_element(elements: Sequence[HostElement], point: Tuple[float, float]) -> Optional[HostElement]:
    nearest = None
    best = math.inf
    for element in elements:
        g = geometry_from_element(element)
        if g is None:
            continue
        cx, cy = g.center
        d = math.hypot(cx - point[0], cy - point[1])
        if d < best:
            best = d
            nearest = element
    return nearest


def viewport_bounds(viewport: Viewport) -> Geometry:
    """Visible scene-space rectangle."""
    return Geometry(
        x=-viewport.scroll_x,
        y=-viewport.scroll_y,
        width=viewport.width / viewport.zoom_value,
        height=viewport.height / viewport.zoom_value,
    )


def is_in_viewport(geometry: Geometry, viewport: Viewport) -> bool:
    bounds = viewport_bounds(viewport)
    return (
        geometry.right > bounds.x
        and geometry.x < bounds.right
        and geometry.bottom > bounds.y
        and geometry.y < bounds.bottom
    )
