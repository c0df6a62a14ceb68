import itertools
import uuid


class IdAllocator:
    """
    Hands out group ids. Member ids are `<group_id>-<suffix>`.

    uuid4 hex keeps collisions negligible across sessions and canvases.
    """

    prefix = "ai"

    def new_group_id(self) -> str:
        return f"{self.prefix}-{uuid.uuid4().hex[:16]}"

    @staticmethod
    def member_id(group_id: str, suffix: str) -> str:
        return f"{group_id}-{suffix}"


class SequentialIdAllocator(IdAllocator):
    """Deterministic ids (`ai-1`, `ai-2`, ...) for reproducible output."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def new_group_id(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"
