from pydantic import BaseModel, Field

from assistant.domain.entities import ChatRole


class ChatMessageSchema(BaseModel):
    role: ChatRole
    text: str


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)
    history: list[ChatMessageSchema] = []
    version_id: str | None = None


class ChatResponse(BaseModel):
    reply: str
