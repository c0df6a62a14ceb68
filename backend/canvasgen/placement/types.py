from dataclasses import dataclass
from typing import Optional, Tuple

from canvasgen.ir.geometry import Geometry


STRATEGIES = ("viewport-center", "grid", "flow", "proximity")

GRID_SIZE = 50
DEFAULT_PADDING = 20
MAX_ATTEMPTS = 50
SEARCH_STEP = 50
MAX_FLOW_WIDTH = 2000


@dataclass(frozen=True)
class PlacementRequest:
    width: float
    height: float
    strategy: str = "viewport-center"
    padding: float = DEFAULT_PADDING
    avoid_overlap: bool = True
    anchor: Optional[Geometry] = None
    preferred_point: Optional[Tuple[float, float]] = None


@dataclass(frozen=True)
class PlacementResult:
    x: float
    y: float


@dataclass(frozen=True)
class PlacementHints:
    """Caller overrides forwarded to the solver. None keeps the per-kind default."""
    strategy: Optional[str] = None
    padding: Optional[float] = None
    avoid_overlap: Optional[bool] = None
    anchor: Optional[Geometry] = None
    preferred_point: Optional[Tuple[float, float]] = None

    def to_request(self, width: float, height: float, default_strategy: str) -> PlacementRequest:
        return PlacementRequest(
            width=width,
            height=height,
            strategy=self.strategy or default_strategy,
            padding=DEFAULT_PADDING if self.padding is None else self.padding,
            avoid_overlap=True if self.avoid_overlap is None else self.avoid_overlap,
            anchor=self.anchor,
            preferred_point=self.preferred_point,
        )
