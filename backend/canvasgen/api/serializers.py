from enum import Enum
from typing import Any

from canvasgen.ir.geometry import CanvasSnapshot, Geometry, Viewport
from canvasgen.canvas.helpers import geometry_from_element
from canvasgen.placement.types import PlacementHints
from canvasgen.schemas import GeometryModel, HintsModel, SnapshotModel
from canvasgen.visual.visual_schema import (
    LineElement,
    RectangleElement,
    TextElement,
    VisualElementGroup,
    element_to_dict,
)


PRIMITIVE_TYPES = (str, int, float, bool, type(None))
ELEMENT_TYPES = (RectangleElement, TextElement, LineElement)


def serialize_ir(obj: Any):
    """
    Serialize canvasgen objects into JSON-compatible structures.
    Elements use the host canvas shape; everything else mirrors its fields.
    """

    if isinstance(obj, PRIMITIVE_TYPES):
        return obj

    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, ELEMENT_TYPES):
        return element_to_dict(obj)

    if isinstance(obj, VisualElementGroup):
        return {
            "group_id": obj.group_id,
            "kind": obj.kind,
            "elements": [element_to_dict(m) for m in obj.members],
        }

    if isinstance(obj, (list, tuple)):
        return [serialize_ir(item) for item in obj]

    if isinstance(obj, (set, frozenset)):
        return sorted(serialize_ir(item) for item in obj)

    if isinstance(obj, dict):
        return {k: serialize_ir(v) for k, v in obj.items()}

    if hasattr(obj, "__dict__"):
        return {
            key: serialize_ir(value)
            for key, value in obj.__dict__.items()
            if not key.startswith("_")
        }

    return str(obj)


# -------------------------
# REQUEST -> CORE
# -------------------------

def to_geometry(model: GeometryModel) -> Geometry:
    return Geometry(x=model.x, y=model.y, width=model.width, height=model.height)


def to_snapshot(model: SnapshotModel) -> CanvasSnapshot:
    geometries = [to_geometry(g) for g in model.existing_geometries]
    geometries.extend(
        g for g in (geometry_from_element(e) for e in model.elements if not e.get("isDeleted")) if g is not None
    )
    vp = model.viewport
    return CanvasSnapshot(
        existing_geometries=tuple(geometries),
        viewport=Viewport(
            scroll_x=vp.scroll_x,
            scroll_y=vp.scroll_y,
            zoom_value=vp.zoom,
            width=vp.width,
            height=vp.height,
            selected_element_ids=frozenset(vp.selected_element_ids),
        ),
    )


def to_hints(model: HintsModel | None) -> PlacementHints | None:
    if model is None:
        return None
    return PlacementHints(
        strategy=model.strategy,
        padding=model.padding,
        avoid_overlap=model.avoid_overlap,
        anchor=to_geometry(model.anchor) if model.anchor else None,
        preferred_point=tuple(model.preferred_point) if model.preferred_point else None,
    )
