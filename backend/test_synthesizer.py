"""
Element synthesizer tests
Run with: pytest backend/test_synthesizer.py
"""

import pytest

from canvasgen.ir.actions import (
    Action,
    ActionKind,
    CodePayload,
    DiagramPayload,
    NotePayload,
    TerminalPayload,
)
from canvasgen.ir.geometry import CanvasSnapshot, Geometry, Viewport
from canvasgen.placement import PlacementHints, PlacementSolver, has_overlap
from canvasgen.visual import ElementSynthesizer, VisualElementGroup, measure
from canvasgen.visual.ids import IdAllocator, SequentialIdAllocator
from canvasgen.visual.visual_schema import LineElement, RectangleElement, TextElement
from canvasgen.visual.visual_style import NOTE_PALETTE


EMPTY = CanvasSnapshot.empty(Viewport(width=1000, height=800))


@pytest.fixture
def synth():
    return ElementSynthesizer(PlacementSolver(), ids=SequentialIdAllocator())


def _assert_group_invariants(group: VisualElementGroup):
    assert group.members
    assert all(m.group_id == group.group_id for m in group.members)
    assert len(set(group.element_ids)) == len(group.members)
    for m in group.members:
        if not isinstance(m, LineElement):
            assert m.geometry.width > 0 and m.geometry.height > 0


# -------------------------
# SIZING
# -------------------------

def test_measure_clamps_to_minimums():
    width, height = measure("code", "x", 16, with_header=True)
    assert (width, height) == (400, 200)


def test_measure_clamps_to_maximums():
    width, _ = measure("code", "x" * 500, 16)
    assert width == 800


def test_measure_grows_with_content():
    lines = "\n".join(["a" * 60] * 20)
    width, height = measure("terminal", lines, 16)
    assert width == pytest.approx(60 * 16 * 0.6)
    assert height == pytest.approx(20 * 16 * 1.5 + 70)


def test_note_minimum_line_length():
    width, _ = measure("note", "hi", 16)
    assert width == 200


def test_empty_content_never_degenerate():
    for kind in ("code", "terminal", "note", "diagram", "chat"):
        width, height = measure(kind, "", 16)
        assert width > 0 and height > 0


# -------------------------
# CONTENT BLOCKS
# -------------------------

def test_code_block_members(synth):
    group = synth.code_block(CodePayload(code="print(1)", language="python"), EMPTY)

    _assert_group_invariants(group)
    kinds = [m.primitive_kind for m in group.members]
    assert kinds == ["rectangle", "text", "line", "text"]

    container, title, divider, code = group.members
    assert container.style["backgroundColor"] == "#0f172a"
    assert title.text == "python"
    assert code.text == "print(1)"
    assert divider.points[-1][0] == divider.geometry.width
    assert group.group_id == "ai-1"
    assert container.id == "ai-1-container"


def test_code_block_without_header():
    synth = ElementSynthesizer(PlacementSolver(), ids=SequentialIdAllocator())
    group = synth.code_block(CodePayload(code="x", language=""), EMPTY)
    assert [m.primitive_kind for m in group.members] == ["rectangle", "text"]


def test_terminal_output_members(synth):
    group = synth.terminal_output(TerminalPayload(output="$ ls\nfile.txt"), EMPTY)

    _assert_group_invariants(group)
    container, header, title, output = group.members
    assert isinstance(header, RectangleElement)
    assert header.geometry.height == 30
    assert title.text == "Terminal"
    assert output.style["strokeColor"] == "#00ff00"
    assert output.geometry.y == container.geometry.y + 30 + 20


@pytest.mark.parametrize("color", sorted(NOTE_PALETTE))
def test_note_palette(synth, color):
    group = synth.note(NotePayload(text="todo", color=color), EMPTY)
    background, border, foreground = NOTE_PALETTE[color]

    rect, text = group.members
    assert rect.style["backgroundColor"] == background
    assert rect.style["strokeColor"] == border
    assert text.style["strokeColor"] == foreground


def test_note_unknown_color_falls_back_to_yellow(synth):
    group = synth.note(NotePayload(text="todo", color="purple"), EMPTY)
    assert group.members[0].style["backgroundColor"] == NOTE_PALETTE["yellow"][0]


def test_diagram_block(synth):
    group = synth.diagram(DiagramPayload(description="client -> server"), EMPTY)
    _assert_group_invariants(group)
    assert group.members[-1].text == "client -> server"


def test_chat_bubble_roles(synth):
    user = synth.chat_bubble("hello", "user", EMPTY)
    assistant = synth.chat_bubble("hi!", "assistant", EMPTY)

    assert user.members[0].style["backgroundColor"] != assistant.members[0].style["backgroundColor"]
    user_label = user.members[-1]
    assert isinstance(user_label, TextElement)
    assert user_label.text == "You"
    assert assistant.members[-1].text == "AI"
    assert user_label.geometry.y == user.members[0].geometry.y - 20


def test_chat_bubble_defaults_to_flow(synth):
    group = synth.chat_bubble("hello", "user", EMPTY)
    bubble = group.members[0]
    assert (bubble.geometry.x, bubble.geometry.y) == (20, 20)


def test_text_label_and_document_placeholder(synth):
    label = synth.text_label("Hi", EMPTY)
    assert label.members[0].geometry.width > 0

    doc = synth.document_placeholder("Roadmap.pdf", "pdf", EMPTY)
    _assert_group_invariants(doc)
    assert doc.members[1].text == "📄"
    assert doc.members[2].text == "Roadmap.pdf"


# -------------------------
# DISPATCH & PLACEMENT
# -------------------------

def test_synthesize_dispatches_on_kind(synth):
    group = synth.synthesize(Action(ActionKind.NOTE, NotePayload(text="n")), EMPTY)
    assert group.kind == "note"


def test_synthesizer_delegates_position_to_solver(synth):
    hints = PlacementHints(strategy="viewport-center", avoid_overlap=False)
    group = synth.note(NotePayload(text="n"), EMPTY, hints)
    rect = group.members[0]
    assert rect.geometry.x == 500 - rect.geometry.width / 2
    assert rect.geometry.y == 400 - rect.geometry.height / 2


def test_synthesizer_avoids_existing_geometry(synth):
    occupied = Geometry(x=0, y=0, width=2000, height=2000)
    snapshot = CanvasSnapshot(existing_geometries=(occupied,), viewport=EMPTY.viewport)

    group = synth.note(NotePayload(text="n"), snapshot)
    rect = group.members[0].geometry
    assert not has_overlap([occupied], rect.x, rect.y, rect.width, rect.height, padding=20)


def test_random_allocator_ids_are_unique():
    ids = IdAllocator()
    allocated = {ids.new_group_id() for _ in range(1000)}
    assert len(allocated) == 1000


def test_group_rejects_foreign_member():
    stray = TextElement(id="x", group_id="other", geometry=Geometry(0, 0, 1, 1))
    with pytest.raises(ValueError):
        VisualElementGroup(group_id="mine", members=(stray,))
