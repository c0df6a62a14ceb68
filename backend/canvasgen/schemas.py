from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List


class GeometryModel(BaseModel):
    x: float
    y: float
    width: float = Field(0, ge=0)
    height: float = Field(0, ge=0)


class ViewportModel(BaseModel):
    scroll_x: float = 0
    scroll_y: float = 0
    zoom: float = Field(1, gt=0)
    width: float = 1000
    height: float = 800
    selected_element_ids: List[str] = []


class SnapshotModel(BaseModel):
    """Either raw host elements, plain geometries, or both."""
    elements: List[Dict[str, Any]] = []
    existing_geometries: List[GeometryModel] = []
    viewport: ViewportModel = ViewportModel()


class HintsModel(BaseModel):
    strategy: Optional[str] = None  # viewport-center | grid | flow | proximity
    padding: Optional[float] = Field(None, ge=0)
    avoid_overlap: Optional[bool] = None
    anchor: Optional[GeometryModel] = None
    preferred_point: Optional[List[float]] = Field(None, min_length=2, max_length=2)


class ParseRequest(BaseModel):
    text: str


class MaterializeRequest(BaseModel):
    text: str
    snapshot: SnapshotModel = SnapshotModel()
    hints: Optional[HintsModel] = None


class PlaceRequest(BaseModel):
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)
    hints: Optional[HintsModel] = None
    snapshot: SnapshotModel = SnapshotModel()


class ChatRequest(BaseModel):
    message: str
    session_id: str = "default"
    snapshot: SnapshotModel = SnapshotModel()
    hints: Optional[HintsModel] = None
    bubbles: bool = False


class MaterializeResponse(BaseModel):
    status: str
    message: str
    groups: List[Dict[str, Any]] = []
    issues: List[Dict[str, Any]] = []
    provider_actions: List[Any] = []


class PlaceResponse(BaseModel):
    x: float
    y: float
