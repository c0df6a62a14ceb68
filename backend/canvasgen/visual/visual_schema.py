from typing import Any, ClassVar, Dict, Tuple, Union
from dataclasses import dataclass, field

from canvasgen.ir.geometry import Geometry


@dataclass(frozen=True)
class RectangleElement:
    primitive_kind: ClassVar[str] = "rectangle"

    id: str
    group_id: str
    geometry: Geometry
    style: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TextElement:
    primitive_kind: ClassVar[str] = "text"

    id: str
    group_id: str
    geometry: Geometry
    style: Dict[str, Any] = field(default_factory=dict)
    text: str = ""


@dataclass(frozen=True)
class LineElement:
    primitive_kind: ClassVar[str] = "line"

    id: str
    group_id: str
    geometry: Geometry
    style: Dict[str, Any] = field(default_factory=dict)
    points: Tuple[Tuple[float, float], ...] = ()


VisualElement = Union[RectangleElement, TextElement, LineElement]


@dataclass(frozen=True)
class VisualElementGroup:
    """
    All primitives that together represent one synthesized content block.
    Handed to the host canvas as-is; never modified afterwards.
    """
    group_id: str
    members: Tuple[VisualElement, ...] = ()
    kind: str = ""

    def __post_init__(self):
        for member in self.members:
            if member.group_id != self.group_id:
                raise ValueError(
                    f"element {member.id} has group_id {member.group_id}, "
                    f"expected {self.group_id}"
                )

    @property
    def element_ids(self) -> Tuple[str, ...]:
        return tuple(m.id for m in self.members)

    @property
    def geometries(self) -> Tuple[Geometry, ...]:
        return tuple(m.geometry for m in self.members)


def element_to_dict(element: VisualElement) -> Dict[str, Any]:
    """Flatten an element into the host canvas' element shape."""
    g = element.geometry
    data: Dict[str, Any] = {
        "type": element.primitive_kind,
        "id": element.id,
        "x": g.x,
        "y": g.y,
        "width": g.width,
        "height": g.height,
        "groupIds": [element.group_id],
    }
    data.update(element.style)
    if isinstance(element, TextElement):
        data["text"] = element.text
    elif isinstance(element, LineElement):
        data["points"] = [list(p) for p in element.points]
    return data
