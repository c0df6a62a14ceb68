"""
Element Synthesizer - turns one action payload into a group of primitives.

Size comes from content (line count, longest line) clamped to per-kind
limits from `visual_style.SIZING`. Position always comes from the
PlacementSolver; the synthesizer only lays members out relative to the
corner it is given.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from canvasgen.ir.actions import (
    Action,
    ActionKind,
    CodePayload,
    DiagramPayload,
    NotePayload,
    TerminalPayload,
)
from canvasgen.ir.errors import ValidationError
from canvasgen.ir.geometry import CanvasSnapshot, Geometry
from canvasgen.ir.validation import ValidationResult
from canvasgen.placement.solver import PlacementSolver
from canvasgen.placement.types import PlacementHints, PlacementResult
from canvasgen.visual.ids import IdAllocator
from canvasgen.visual.visual_schema import (
    LineElement,
    RectangleElement,
    TextElement,
    VisualElement,
    VisualElementGroup,
)
from canvasgen.visual.visual_style import (
    CHAR_WIDTH_FACTOR,
    CHAT_LABEL_COLOR,
    CHAT_LABEL_OFFSET,
    CHAT_ROLES,
    CHAT_TEXT_COLOR,
    CODE_STYLE,
    CONTENT_PADDING,
    DEFAULT_FONT_SIZE,
    DEFAULT_NOTE_COLOR,
    DIAGRAM_STYLE,
    DOCUMENT_ICONS,
    DOCUMENT_SIZE,
    FONT_HANDWRITTEN,
    FONT_SANS,
    HEADER_HEIGHT,
    NOTE_PALETTE,
    SIZING,
    TERMINAL_STYLE,
)

logger = logging.getLogger(__name__)

MIN_DIMENSION = 1.0


def clamp(low: float, high: float, value: float) -> float:
    return max(low, min(high, value))


def measure(kind: str, text: str, font_size: float, with_header: Optional[bool] = None) -> Tuple[float, float]:
    """
    Content-driven (width, height) for a block of `kind`.

    width  = clamp(min, max, longest_line * font_size * 0.6)
    height = clamp(min, max, lines * font_size * line_height + chrome)
    """
    rules = SIZING[kind]
    lines = text.split("\n")
    longest = max(max(len(line) for line in lines), rules["min_line_chars"])

    if with_header is None:
        with_header = rules.get("header", False)
    chrome = rules["chrome"] + (HEADER_HEIGHT if with_header else 0)

    width = clamp(rules["min_width"], rules["max_width"], longest * font_size * CHAR_WIDTH_FACTOR)
    height = clamp(rules["min_height"], rules["max_height"], len(lines) * font_size * rules["line_height"] + chrome)
    return max(width, MIN_DIMENSION), max(height, MIN_DIMENSION)


def _text_style(font_size: float, **extra: Any) -> Dict[str, Any]:
    style = {
        "fontSize": font_size,
        "textAlign": "left",
        "backgroundColor": "transparent",
        "opacity": 100,
    }
    style.update(extra)
    return style


def _box(x: float, y: float, width: float, height: float) -> Geometry:
    return Geometry(x=x, y=y, width=max(width, MIN_DIMENSION), height=max(height, MIN_DIMENSION))


def validate_group(group: VisualElementGroup) -> ValidationResult:
    errors: List[ValidationError] = []
    seen = set()

    if not group.members:
        errors.append(ValidationError(level="group", message="group has no members", object_id=group.group_id))

    for member in group.members:
        if member.id in seen:
            errors.append(ValidationError(level="element", message="duplicate element id", object_id=member.id))
        seen.add(member.id)

        if member.primitive_kind != "line":
            if member.geometry.width <= 0 or member.geometry.height <= 0:
                errors.append(ValidationError(
                    level="element",
                    message=f"degenerate {member.primitive_kind} size "
                            f"{member.geometry.width}x{member.geometry.height}",
                    object_id=member.id,
                ))

    if errors:
        return ValidationResult.failure(errors)
    return ValidationResult.success()


class ElementSynthesizer:
    """
    Usage:
        synth = ElementSynthesizer(PlacementSolver())
        group = synth.synthesize(action, snapshot)

    The solver and id allocator are owned by the caller-provided instance,
    never shared module state.
    """

    def __init__(
        self,
        solver: PlacementSolver,
        ids: Optional[IdAllocator] = None,
        font_size: float = DEFAULT_FONT_SIZE,
    ):
        self.solver = solver
        self.ids = ids or IdAllocator()
        self.font_size = font_size

    # =========================================================
    # DISPATCH
    # =========================================================

    def synthesize(
        self,
        action: Action,
        snapshot: CanvasSnapshot,
        hints: Optional[PlacementHints] = None,
    ) -> VisualElementGroup:
        payload = action.payload

        if action.kind is ActionKind.CODE:
            return self.code_block(payload, snapshot, hints)
        if action.kind is ActionKind.TERMINAL:
            return self.terminal_output(payload, snapshot, hints)
        if action.kind is ActionKind.NOTE:
            return self.note(payload, snapshot, hints)
        if action.kind is ActionKind.DIAGRAM:
            return self.diagram(payload, snapshot, hints)

        raise ValueError(f"Unsupported action kind: {action.kind}")

    # =========================================================
    # CONTENT BLOCKS
    # =========================================================

    def code_block(
        self,
        payload: CodePayload,
        snapshot: CanvasSnapshot,
        hints: Optional[PlacementHints] = None,
    ) -> VisualElementGroup:
        fs = self.font_size
        pad = CONTENT_PADDING
        title = payload.title or payload.language
        title_height = HEADER_HEIGHT if title else 0

        width, height = measure("code", payload.code, fs, with_header=bool(title))
        pos = self._place("code", width, height, snapshot, hints)
        group_id = self.ids.new_group_id()

        members: List[VisualElement] = [
            RectangleElement(
                id=self.ids.member_id(group_id, "container"),
                group_id=group_id,
                geometry=_box(pos.x, pos.y, width, height),
                style=dict(CODE_STYLE["container"]),
            )
        ]

        if title:
            members.append(TextElement(
                id=self.ids.member_id(group_id, "title"),
                group_id=group_id,
                geometry=_box(pos.x + pad, pos.y + 8, width - pad * 2, 20),
                style=_text_style(fs * 0.85, **CODE_STYLE["title"]),
                text=title,
            ))
            members.append(self._divider(group_id, pos.x + pad, pos.y + title_height, width - pad * 2, CODE_STYLE["divider"]))

        members.append(TextElement(
            id=self.ids.member_id(group_id, "code"),
            group_id=group_id,
            geometry=_box(pos.x + pad, pos.y + title_height + pad, width - pad * 2, height - title_height - pad * 2),
            style=_text_style(fs, **CODE_STYLE["text"]),
            text=payload.code,
        ))

        return self._finish(group_id, "code", members)

    def terminal_output(
        self,
        payload: TerminalPayload,
        snapshot: CanvasSnapshot,
        hints: Optional[PlacementHints] = None,
    ) -> VisualElementGroup:
        fs = self.font_size
        pad = CONTENT_PADDING

        width, height = measure("terminal", payload.output, fs)
        pos = self._place("terminal", width, height, snapshot, hints)
        group_id = self.ids.new_group_id()

        members: List[VisualElement] = [
            RectangleElement(
                id=self.ids.member_id(group_id, "container"),
                group_id=group_id,
                geometry=_box(pos.x, pos.y, width, height),
                style=dict(TERMINAL_STYLE["container"]),
            ),
            RectangleElement(
                id=self.ids.member_id(group_id, "header"),
                group_id=group_id,
                geometry=_box(pos.x, pos.y, width, HEADER_HEIGHT),
                style=dict(TERMINAL_STYLE["header"]),
            ),
        ]

        if payload.title:
            members.append(TextElement(
                id=self.ids.member_id(group_id, "title"),
                group_id=group_id,
                geometry=_box(pos.x + pad, pos.y + 8, width - pad * 2, 16),
                style=_text_style(fs * 0.8, **TERMINAL_STYLE["title"]),
                text=payload.title,
            ))

        members.append(TextElement(
            id=self.ids.member_id(group_id, "output"),
            group_id=group_id,
            geometry=_box(pos.x + pad, pos.y + HEADER_HEIGHT + pad, width - pad * 2, height - HEADER_HEIGHT - pad * 2),
            style=_text_style(fs, **TERMINAL_STYLE["text"]),
            text=payload.output,
        ))

        return self._finish(group_id, "terminal", members)

    def note(
        self,
        payload: NotePayload,
        snapshot: CanvasSnapshot,
        hints: Optional[PlacementHints] = None,
    ) -> VisualElementGroup:
        fs = self.font_size
        pad = CONTENT_PADDING
        background, border, foreground = NOTE_PALETTE.get(payload.color, NOTE_PALETTE[DEFAULT_NOTE_COLOR])

        width, height = measure("note", payload.text, fs)
        pos = self._place("note", width, height, snapshot, hints)
        group_id = self.ids.new_group_id()

        members: List[VisualElement] = [
            RectangleElement(
                id=self.ids.member_id(group_id, "note"),
                group_id=group_id,
                geometry=_box(pos.x, pos.y, width, height),
                style={
                    "strokeColor": border,
                    "backgroundColor": background,
                    "fillStyle": "solid",
                    "strokeWidth": 2,
                    "roughness": 1,
                    "opacity": 90,
                    "roundness": {"type": 3, "value": 4},
                },
            ),
            TextElement(
                id=self.ids.member_id(group_id, "text"),
                group_id=group_id,
                geometry=_box(pos.x + pad, pos.y + pad, width - pad * 2, height - pad * 2),
                style=_text_style(fs, strokeColor=foreground, fontFamily=FONT_HANDWRITTEN, lineHeight=1.5),
                text=payload.text,
            ),
        ]

        return self._finish(group_id, "note", members)

    def diagram(
        self,
        payload: DiagramPayload,
        snapshot: CanvasSnapshot,
        hints: Optional[PlacementHints] = None,
    ) -> VisualElementGroup:
        """A titled placeholder card holding the diagram description."""
        fs = self.font_size
        pad = CONTENT_PADDING

        width, height = measure("diagram", payload.description, fs)
        pos = self._place("diagram", width, height, snapshot, hints)
        group_id = self.ids.new_group_id()

        members: List[VisualElement] = [
            RectangleElement(
                id=self.ids.member_id(group_id, "container"),
                group_id=group_id,
                geometry=_box(pos.x, pos.y, width, height),
                style=dict(DIAGRAM_STYLE["container"]),
            ),
            TextElement(
                id=self.ids.member_id(group_id, "title"),
                group_id=group_id,
                geometry=_box(pos.x + pad, pos.y + 8, width - pad * 2, 20),
                style=_text_style(fs * 0.9, **DIAGRAM_STYLE["title"]),
                text="Diagram",
            ),
            self._divider(group_id, pos.x + pad, pos.y + HEADER_HEIGHT, width - pad * 2, DIAGRAM_STYLE["divider"]),
            TextElement(
                id=self.ids.member_id(group_id, "description"),
                group_id=group_id,
                geometry=_box(pos.x + pad, pos.y + HEADER_HEIGHT + pad, width - pad * 2, height - HEADER_HEIGHT - pad * 2),
                style=_text_style(fs, **DIAGRAM_STYLE["text"]),
                text=payload.description,
            ),
        ]

        return self._finish(group_id, "diagram", members)

    def chat_bubble(
        self,
        message: str,
        role: str,
        snapshot: CanvasSnapshot,
        hints: Optional[PlacementHints] = None,
    ) -> VisualElementGroup:
        fs = self.font_size
        pad = CONTENT_PADDING
        palette = CHAT_ROLES.get(role, CHAT_ROLES["assistant"])

        width, height = measure("chat", message, fs)
        pos = self._place("chat", width, height, snapshot, hints)
        group_id = self.ids.new_group_id()

        members: List[VisualElement] = [
            RectangleElement(
                id=self.ids.member_id(group_id, "bubble"),
                group_id=group_id,
                geometry=_box(pos.x, pos.y, width, height),
                style={
                    "strokeColor": palette["color"],
                    "backgroundColor": palette["color"],
                    "fillStyle": "solid",
                    "strokeWidth": 0,
                    "roughness": 0,
                    "opacity": 95,
                    "roundness": {"type": 3, "value": 16},
                },
            ),
            TextElement(
                id=self.ids.member_id(group_id, "text"),
                group_id=group_id,
                geometry=_box(pos.x + pad, pos.y + pad * 0.75, width - pad * 2, height - pad * 1.5),
                style=_text_style(fs, strokeColor=CHAT_TEXT_COLOR, fontFamily=FONT_SANS, lineHeight=1.5),
                text=message,
            ),
            TextElement(
                id=self.ids.member_id(group_id, "label"),
                group_id=group_id,
                geometry=_box(pos.x + pad, pos.y - CHAT_LABEL_OFFSET, 100, 16),
                style=_text_style(fs * 0.75, strokeColor=CHAT_LABEL_COLOR, fontFamily=FONT_SANS, opacity=80),
                text=palette["label"],
            ),
        ]

        return self._finish(group_id, "chat", members)

    def text_label(
        self,
        text: str,
        snapshot: CanvasSnapshot,
        hints: Optional[PlacementHints] = None,
        font_size: float = 20,
    ) -> VisualElementGroup:
        rules = SIZING["text"]
        width = clamp(rules["min_width"], rules["max_width"], len(text) * font_size * CHAR_WIDTH_FACTOR)
        height = font_size * rules["line_height"]

        pos = self._place("text", width, height, snapshot, hints)
        group_id = self.ids.new_group_id()

        members: List[VisualElement] = [
            TextElement(
                id=self.ids.member_id(group_id, "text"),
                group_id=group_id,
                geometry=_box(pos.x, pos.y, width, height),
                style=_text_style(font_size, strokeColor="#1e293b", fontFamily=FONT_SANS),
                text=text,
            )
        ]
        return self._finish(group_id, "text", members)

    def document_placeholder(
        self,
        title: str,
        doc_type: str,
        snapshot: CanvasSnapshot,
        hints: Optional[PlacementHints] = None,
    ) -> VisualElementGroup:
        width, height = DOCUMENT_SIZE
        pos = self._place("text", width, height, snapshot, hints)
        group_id = self.ids.new_group_id()
        icon = DOCUMENT_ICONS.get(doc_type, DOCUMENT_ICONS["file"])

        members: List[VisualElement] = [
            RectangleElement(
                id=self.ids.member_id(group_id, "container"),
                group_id=group_id,
                geometry=_box(pos.x, pos.y, width, height),
                style={
                    "strokeColor": "#94a3b8",
                    "backgroundColor": "#f8fafc",
                    "fillStyle": "solid",
                    "strokeWidth": 2,
                    "roughness": 0,
                    "opacity": 100,
                    "roundness": {"type": 3, "value": 8},
                },
            ),
            TextElement(
                id=self.ids.member_id(group_id, "icon"),
                group_id=group_id,
                geometry=_box(pos.x + width / 2 - 30, pos.y + height / 2 - 60, 60, 60),
                style=_text_style(48, strokeColor="#64748b", fontFamily=FONT_SANS, textAlign="center", opacity=60),
                text=icon,
            ),
            TextElement(
                id=self.ids.member_id(group_id, "title"),
                group_id=group_id,
                geometry=_box(pos.x + 20, pos.y + height / 2 + 20, width - 40, 30),
                style=_text_style(18, strokeColor="#1e293b", fontFamily=FONT_SANS, textAlign="center"),
                text=title,
            ),
        ]
        return self._finish(group_id, "document", members)

    # =========================================================
    # HELPERS
    # =========================================================

    def _place(
        self,
        kind: str,
        width: float,
        height: float,
        snapshot: CanvasSnapshot,
        hints: Optional[PlacementHints],
    ) -> PlacementResult:
        request = (hints or PlacementHints()).to_request(width, height, SIZING[kind]["strategy"])
        return self.solver.solve(snapshot.existing_geometries, snapshot.viewport, request)

    def _divider(self, group_id: str, x: float, y: float, length: float, style: Dict[str, Any]) -> LineElement:
        length = max(length, MIN_DIMENSION)
        return LineElement(
            id=self.ids.member_id(group_id, "divider"),
            group_id=group_id,
            geometry=Geometry(x=x, y=y, width=length, height=0),
            style=dict(style),
            points=((0.0, 0.0), (length, 0.0)),
        )

    def _finish(self, group_id: str, kind: str, members: List[VisualElement]) -> VisualElementGroup:
        group = VisualElementGroup(group_id=group_id, members=tuple(members), kind=kind)
        result = validate_group(group)
        if not result.is_valid:
            # only reachable with broken sizing constants
            raise ValueError("; ".join(result.messages))
        logger.debug("Synthesized %s group %s with %d members", kind, group_id, len(members))
        return group
