import logging
from collections import OrderedDict

from fastapi import APIRouter, HTTPException

from canvasgen import config
from canvasgen.api.serializers import serialize_ir, to_hints, to_snapshot
from canvasgen.inference.config import get_provider_client
from canvasgen.ir.errors import ProviderConfigError, UpstreamProviderError
from canvasgen.llm.parser import ActionGrammarParser
from canvasgen.pipeline.context import MaterializeResult
from canvasgen.pipeline.controller import ContentPipeline, ConversationSession
from canvasgen.placement.solver import PlacementSolver
from canvasgen.placement.types import PlacementHints
from canvasgen.schemas import (
    ChatRequest,
    MaterializeRequest,
    MaterializeResponse,
    ParseRequest,
    PlaceRequest,
    PlaceResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# One session per chat, in memory only; least recently used evicted past MAX_SESSIONS
_sessions: "OrderedDict[str, ConversationSession]" = OrderedDict()


def get_session(session_id: str) -> ConversationSession:
    session = _sessions.get(session_id)
    if session is not None:
        _sessions.move_to_end(session_id)
        return session

    session = ConversationSession(client=get_provider_client())
    _sessions[session_id] = session
    while len(_sessions) > config.MAX_SESSIONS:
        evicted, _ = _sessions.popitem(last=False)
        logger.info("Evicted chat session %s", evicted)
    return session


def _to_response(result: MaterializeResult) -> MaterializeResponse:
    return MaterializeResponse(
        status="warning" if result.issues else "success",
        message=result.cleaned_message,
        groups=serialize_ir(result.groups),
        issues=[issue.to_dict() for issue in result.issues],
        provider_actions=serialize_ir(result.provider_actions),
    )


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/parse")
def parse_text(request: ParseRequest):
    parsed = ActionGrammarParser().parse(request.text)
    return {
        "message": parsed.cleaned_message,
        "actions": serialize_ir(parsed.actions),
        "issues": [issue.to_dict() for issue in parsed.issues],
    }


@router.post("/materialize", response_model=MaterializeResponse)
def materialize(request: MaterializeRequest):
    result = ContentPipeline().materialize(
        request.text,
        to_snapshot(request.snapshot),
        to_hints(request.hints),
    )
    return _to_response(result)


@router.post("/place", response_model=PlaceResponse)
def place(request: PlaceRequest):
    snapshot = to_snapshot(request.snapshot)
    hints = to_hints(request.hints) or PlacementHints()
    placement = hints.to_request(request.width, request.height, "viewport-center")

    result = PlacementSolver().solve(snapshot.existing_geometries, snapshot.viewport, placement)
    return PlaceResponse(x=result.x, y=result.y)


@router.post("/chat", response_model=MaterializeResponse)
def chat(request: ChatRequest):
    try:
        session = get_session(request.session_id)
    except ProviderConfigError as e:
        raise HTTPException(status_code=503, detail=str(e))

    try:
        result = session.send(
            request.message,
            to_snapshot(request.snapshot),
            elements=request.snapshot.elements,
            hints=to_hints(request.hints),
            bubbles=request.bubbles,
        )
    except UpstreamProviderError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return _to_response(result)


@router.delete("/chat/{session_id}")
def clear_chat(session_id: str):
    session = _sessions.pop(session_id, None)
    return {"status": "cleared" if session else "not_found"}
