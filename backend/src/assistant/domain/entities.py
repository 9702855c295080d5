from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol


class ChatRole(StrEnum):
    USER = "user"
    MODEL = "model"


@dataclass(frozen=True)
class ChatMessage:
    role: ChatRole
    text: str


class CompletionClient(Protocol):
    async def generate(
        self, history: list[ChatMessage], document_text: str, user_message: str
    ) -> str: ...
