from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ActionKind(Enum):
    CODE = "CODE"
    TERMINAL = "TERMINAL"
    NOTE = "NOTE"
    DIAGRAM = "DIAGRAM"

    @classmethod
    def lookup(cls, name: str) -> Optional["ActionKind"]:
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class CodePayload:
    code: str
    language: str = "text"
    title: Optional[str] = None


@dataclass(frozen=True)
class TerminalPayload:
    output: str
    title: Optional[str] = "Terminal"


@dataclass(frozen=True)
class NotePayload:
    text: str
    color: str = "yellow"


@dataclass(frozen=True)
class DiagramPayload:
    description: str


ActionPayload = Union[CodePayload, TerminalPayload, NotePayload, DiagramPayload]


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    payload: ActionPayload
