import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from canvasgen.ir.actions import (
    Action,
    ActionKind,
    CodePayload,
    DiagramPayload,
    NotePayload,
    TerminalPayload,
)
from canvasgen.ir.errors import ParseIssue

logger = logging.getLogger(__name__)


OPEN_PREFIX = "[ACTION:"
OPEN_SUFFIX = "]"
CLOSER = "[/ACTION]"

# ```lang\n body ```
CODE_FENCE_RE = re.compile(r"```(\w+)?\n(.*?)```", re.DOTALL)


@dataclass
class ParseResult:
    cleaned_message: str
    actions: List[Action] = field(default_factory=list)
    issues: List[ParseIssue] = field(default_factory=list)


# ============================================================
# PAYLOAD PARSERS
# ============================================================

def parse_code_body(body: str) -> CodePayload:
    match = CODE_FENCE_RE.search(body)
    if match:
        return CodePayload(
            code=match.group(2).strip(),
            language=match.group(1) or "text",
        )
    return CodePayload(code=body.strip(), language="text")


def build_action(kind: ActionKind, body: str) -> Action:
    if kind is ActionKind.CODE:
        payload = parse_code_body(body)
    elif kind is ActionKind.TERMINAL:
        payload = TerminalPayload(output=body.strip())
    elif kind is ActionKind.NOTE:
        payload = NotePayload(text=body.strip())
    else:
        payload = DiagramPayload(description=body.strip())
    return Action(kind=kind, payload=payload)


# ============================================================
# MARKER SCANNER
# ============================================================

class ActionGrammarParser:
    """
    Extracts `[ACTION:<KIND>] ... [/ACTION]` spans from assistant text.

    The scanner is deliberately not nesting-aware: a span ends at the first
    closer after its opener, so an inner opener is swallowed into the outer
    body and the outer span's real closer is left behind in the message.
    Such bodies are reported as NESTED_OPENER issues.

    Nothing here raises. Unknown kinds are stripped and dropped, unterminated
    openers are left in place; both are reported in `ParseResult.issues`.
    """

    def parse(self, text: str) -> ParseResult:
        if not text:
            return ParseResult(cleaned_message=text or "")

        actions: List[Action] = []
        issues: List[ParseIssue] = []
        kept: List[str] = []
        pos = 0
        stripped_any = False

        while True:
            start = text.find(OPEN_PREFIX, pos)
            if start == -1:
                break

            kind_end = text.find(OPEN_SUFFIX, start + len(OPEN_PREFIX))
            close = -1 if kind_end == -1 else text.find(CLOSER, kind_end + 1)

            if close == -1:
                issues.append(self._issue(
                    "UNTERMINATED",
                    "Action marker has no closing [/ACTION]; left in message",
                    start,
                ))
                break

            raw_kind = text[start + len(OPEN_PREFIX):kind_end].strip()
            body = text[kind_end + 1:close]

            kept.append(text[pos:start])
            pos = close + len(CLOSER)
            stripped_any = True

            if OPEN_PREFIX in body:
                issues.append(self._issue(
                    "NESTED_OPENER",
                    "Action body contains another opener; span ended at the first closer",
                    start,
                    raw_kind,
                ))

            kind = ActionKind.lookup(raw_kind)
            if kind is None:
                issues.append(self._issue(
                    "UNKNOWN_KIND",
                    f"Unknown action kind {raw_kind!r}; span dropped",
                    start,
                    raw_kind,
                ))
                continue

            actions.append(build_action(kind, body))

        kept.append(text[pos:])
        message = "".join(kept)
        if stripped_any:
            message = message.strip()

        for issue in issues:
            logger.warning("Action parse issue [%s] at %d: %s", issue.code, issue.offset, issue.message)

        return ParseResult(cleaned_message=message, actions=actions, issues=issues)

    @staticmethod
    def _issue(code: str, message: str, offset: int, kind: Optional[str] = None) -> ParseIssue:
        return ParseIssue(level="warning", code=code, message=message, offset=offset, kind=kind)
