# Visual module
# Builds the primitives that represent one content block on the canvas

from canvasgen.visual.visual_schema import (
    RectangleElement,
    TextElement,
    LineElement,
    VisualElement,
    VisualElementGroup,
)
from canvasgen.visual.synthesizer import ElementSynthesizer, measure, validate_group

__all__ = [
    "RectangleElement",
    "TextElement",
    "LineElement",
    "VisualElement",
    "VisualElementGroup",
    "ElementSynthesizer",
    "measure",
    "validate_group",
]
