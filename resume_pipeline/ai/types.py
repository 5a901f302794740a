from dataclasses import dataclass
from typing import Literal, Protocol, Sequence


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


class StructuredDataClient(Protocol):
    def complete_json(self, messages: Sequence[ChatMessage]) -> str: ...
