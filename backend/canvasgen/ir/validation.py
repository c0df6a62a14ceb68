from dataclasses import dataclass, field
from typing import List
from .errors import ValidationError


@dataclass
class ValidationResult:
    """Outcome of checking a synthesized group before it leaves the synthesizer."""
    is_valid: bool
    errors: List[ValidationError] = field(default_factory=list)

    @classmethod
    def success(cls):
        return cls(is_valid=True, errors=[])

    @classmethod
    def failure(cls, errors: List[ValidationError]):
        return cls(is_valid=False, errors=errors)

    @property
    def messages(self) -> List[str]:
        return [f"[{e.level}] {e.object_id}: {e.message}" for e in self.errors]
