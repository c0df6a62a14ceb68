from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple


@dataclass(frozen=True)
class Geometry:
    """Scene-space rectangle. Width and height are never negative."""
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"geometry dimensions must be >= 0, got {self.width}x{self.height}"
            )

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class BoundingBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float
    width: float
    height: float

    def to_geometry(self) -> Geometry:
        return Geometry(x=self.min_x, y=self.min_y, width=self.width, height=self.height)


@dataclass(frozen=True)
class Viewport:
    scroll_x: float = 0.0
    scroll_y: float = 0.0
    zoom_value: float = 1.0
    width: float = 1000.0
    height: float = 800.0
    selected_element_ids: FrozenSet[str] = frozenset()

    def __post_init__(self):
        if self.zoom_value <= 0:
            raise ValueError(f"zoom must be positive, got {self.zoom_value}")


@dataclass(frozen=True)
class CanvasSnapshot:
    """
    Read-only view of the canvas handed to every placement call.

    The pipeline never mutates a snapshot; it derives a new one with
    `with_geometry` after each synthesis.
    """
    existing_geometries: Tuple[Geometry, ...] = ()
    viewport: Viewport = field(default_factory=Viewport)

    def with_geometry(self, geometry: Geometry) -> "CanvasSnapshot":
        return CanvasSnapshot(
            existing_geometries=self.existing_geometries + (geometry,),
            viewport=self.viewport,
        )

    @classmethod
    def empty(cls, viewport: Optional[Viewport] = None) -> "CanvasSnapshot":
        return cls(existing_geometries=(), viewport=viewport or Viewport())
