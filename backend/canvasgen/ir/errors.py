from dataclasses import dataclass
from typing import Optional


@dataclass
class ValidationError:
    level: str
    message: str
    object_id: str


@dataclass
class ParseIssue:
    """A recovered problem found while scanning for action markers."""
    level: str          # warning | info
    code: str           # UNKNOWN_KIND | UNTERMINATED | NESTED_OPENER
    message: str
    offset: int
    kind: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "code": self.code,
            "message": self.message,
            "offset": self.offset,
            "kind": self.kind,
        }


class CanvasGenError(Exception):
    """Base class for errors raised by canvasgen."""


class ProviderConfigError(CanvasGenError):
    """The configured provider is missing an api key or endpoint."""


class UpstreamProviderError(CanvasGenError):
    """The AI provider call failed. Nothing was materialized for the turn."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
