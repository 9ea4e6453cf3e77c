"""AI Schemas — chat proxy and admin settings contracts.

Invariants:
    - Chat message must be a non-blank string (400 otherwise)
    - Sensitive setting values (API keys, secrets) are masked in list responses
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

from app.core.domain_types import MessageRole

NonBlank = Annotated[str, StringConstraints(min_length=1, pattern=r"\S")]


class ChatMessage(BaseModel):
    role: MessageRole
    content: str = Field(max_length=20_000)


class ChatRequest(BaseModel):
    message: Annotated[NonBlank, StringConstraints(max_length=20_000)]
    conversation_history: list[ChatMessage] = Field(default_factory=list, max_length=100)


class ChatResponse(BaseModel):
    message: str
    provider: str


class PromptRequest(BaseModel):
    prompt: Annotated[NonBlank, StringConstraints(max_length=20_000)]


class PromptResponse(BaseModel):
    prompt: str


class AISettingUpsert(BaseModel):
    setting_value: str = Field(max_length=20_000)
    description: str | None = Field(None, max_length=500)


class AISettingResponse(BaseModel):
    setting_key: str
    setting_value: str
    description: str | None
    is_sensitive: bool
    updated_at: datetime
