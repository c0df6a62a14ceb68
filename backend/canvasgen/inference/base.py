from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Message:
    role: str       # user | assistant | system
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class ProviderContext:
    history: List[Message] = field(default_factory=list)
    canvas_summary: str = ""
    system_prompt: str = ""


@dataclass
class ProviderResponse:
    message: str
    actions: List[Any] = field(default_factory=list)


class ProviderClient(ABC):
    @abstractmethod
    def send_message(self, text: str, context: ProviderContext) -> ProviderResponse:
        """
        Must:
        - make exactly one request, no retries
        - raise UpstreamProviderError on any failure
        """
        pass
