from dataclasses import dataclass, field
from typing import Any, List, Optional

from canvasgen.ir.actions import Action
from canvasgen.ir.errors import ParseIssue
from canvasgen.ir.geometry import CanvasSnapshot
from canvasgen.visual.visual_schema import VisualElementGroup


@dataclass
class PipelineContext:
    # Raw input (authoritative)
    conversation_text: str

    # Snapshot as handed in by the caller; never modified
    initial_snapshot: CanvasSnapshot

    # Set to place the user/assistant chat bubbles ahead of the action groups
    user_text: Optional[str] = None

    # Working snapshot, extended after every synthesis
    snapshot: Optional[CanvasSnapshot] = None

    cleaned_message: str = ""
    actions: List[Action] = field(default_factory=list)
    groups: List[VisualElementGroup] = field(default_factory=list)
    issues: List[ParseIssue] = field(default_factory=list)

    # Provider-native actions, kept for callers but never materialized
    provider_actions: List[Any] = field(default_factory=list)

    def __post_init__(self):
        if self.snapshot is None:
            self.snapshot = self.initial_snapshot


@dataclass
class MaterializeResult:
    cleaned_message: str
    groups: List[VisualElementGroup] = field(default_factory=list)
    issues: List[ParseIssue] = field(default_factory=list)
    provider_actions: List[Any] = field(default_factory=list)

    @classmethod
    def from_context(cls, context: PipelineContext) -> "MaterializeResult":
        return cls(
            cleaned_message=context.cleaned_message,
            groups=list(context.groups),
            issues=list(context.issues),
            provider_actions=list(context.provider_actions),
        )
