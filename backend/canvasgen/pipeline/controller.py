import logging
from typing import List, Optional, Sequence

from canvasgen import config
from canvasgen.canvas.helpers import HostElement, canvas_summary
from canvasgen.inference.base import Message, ProviderClient, ProviderContext
from canvasgen.inference.prompt import SYSTEM_PROMPT
from canvasgen.ir.errors import UpstreamProviderError
from canvasgen.ir.geometry import CanvasSnapshot
from canvasgen.llm.parser import ActionGrammarParser
from canvasgen.pipeline.context import MaterializeResult, PipelineContext
from canvasgen.placement.geometry import bounding_box
from canvasgen.placement.solver import PlacementSolver
from canvasgen.placement.types import PlacementHints
from canvasgen.visual.ids import IdAllocator
from canvasgen.visual.synthesizer import ElementSynthesizer
from canvasgen.visual.visual_schema import VisualElementGroup

logger = logging.getLogger(__name__)


class ContentPipeline:
    """
    Parser -> Synthesizer (per action) -> finished element groups.

    Siblings from one response avoid each other because the working
    snapshot grows by each new group's bounding box before the next
    action is synthesized.
    """

    def __init__(
        self,
        parser: Optional[ActionGrammarParser] = None,
        synthesizer: Optional[ElementSynthesizer] = None,
    ):
        self.parser = parser or ActionGrammarParser()
        self.synthesizer = synthesizer or ElementSynthesizer(PlacementSolver())

    def materialize(
        self,
        conversation_text: str,
        snapshot: CanvasSnapshot,
        hints: Optional[PlacementHints] = None,
    ) -> MaterializeResult:
        context = PipelineContext(conversation_text=conversation_text, initial_snapshot=snapshot)
        self.run(context, hints)
        return MaterializeResult.from_context(context)

    def run(self, context: PipelineContext, hints: Optional[PlacementHints] = None) -> PipelineContext:
        parsed = self.parser.parse(context.conversation_text)
        context.cleaned_message = parsed.cleaned_message
        context.actions = parsed.actions
        context.issues.extend(parsed.issues)

        if context.user_text is not None:
            # bubbles always flow, whatever the hints say for the actions
            self._add_group(context, self.synthesizer.chat_bubble(context.user_text, "user", context.snapshot))
            if context.cleaned_message:
                self._add_group(
                    context, self.synthesizer.chat_bubble(context.cleaned_message, "assistant", context.snapshot)
                )

        for action in context.actions:
            self._add_group(context, self.synthesizer.synthesize(action, context.snapshot, hints))

        logger.info(
            "Materialized %d action(s) into %d group(s), %d parse issue(s)",
            len(context.actions), len(context.groups), len(context.issues),
        )
        return context

    @staticmethod
    def _add_group(context: PipelineContext, group: VisualElementGroup) -> None:
        context.groups.append(group)
        box = bounding_box(group.geometries)
        if box is not None:
            context.snapshot = context.snapshot.with_geometry(box.to_geometry())


class ConversationSession:
    """
    One chat with the provider against one canvas.

    Only the last `history_limit` messages are kept; they are sent with each
    turn and have no effect on placement. A failed provider call leaves no
    trace: nothing is parsed, synthesized or recorded.
    """

    def __init__(
        self,
        client: ProviderClient,
        pipeline: Optional[ContentPipeline] = None,
        history_limit: int = config.HISTORY_LIMIT,
        system_prompt: str = SYSTEM_PROMPT,
    ):
        self.client = client
        self.pipeline = pipeline or ContentPipeline()
        self.history_limit = history_limit
        self.system_prompt = system_prompt
        self._history: List[Message] = []

    @property
    def history(self) -> List[Message]:
        return list(self._history)

    def clear_history(self) -> None:
        self._history = []

    def send(
        self,
        user_text: str,
        snapshot: CanvasSnapshot,
        elements: Sequence[HostElement] = (),
        hints: Optional[PlacementHints] = None,
        bubbles: bool = False,
    ) -> MaterializeResult:
        provider_context = ProviderContext(
            history=list(self._history),
            canvas_summary=canvas_summary(elements),
            system_prompt=self.system_prompt,
        )

        try:
            response = self.client.send_message(user_text, provider_context)
        except UpstreamProviderError:
            logger.error("Provider call failed; nothing materialized for this turn")
            raise

        self._history.append(Message(role="user", content=user_text))
        self._history.append(Message(role="assistant", content=response.message))
        self._history = self._history[-self.history_limit:] if self.history_limit > 0 else []

        context = PipelineContext(
            conversation_text=response.message,
            initial_snapshot=snapshot,
            user_text=user_text if bubbles else None,
        )
        context.provider_actions = list(response.actions)
        self.pipeline.run(context, hints)
        return MaterializeResult.from_context(context)


def build_pipeline(ids: Optional[IdAllocator] = None, solver: Optional[PlacementSolver] = None) -> ContentPipeline:
    return ContentPipeline(
        parser=ActionGrammarParser(),
        synthesizer=ElementSynthesizer(solver or PlacementSolver(), ids=ids),
    )
