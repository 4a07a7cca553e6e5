from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field  # type: ignore[import-not-found]


MessageRole = Literal["user", "model"]


class ConversationPublic(BaseModel):
    id: UUID
    user_id: UUID
    title: str
    created_at: datetime
    updated_at: datetime


class MessagePublic(BaseModel):
    id: UUID
    conversation_id: UUID
    role: MessageRole
    content: str
    created_at: datetime


class ListConversationsResponse(BaseModel):
    items: list[ConversationPublic]


class GetConversationResponse(BaseModel):
    conversation: ConversationPublic
    messages: list[MessagePublic]


class ListMessagesResponse(BaseModel):
    items: list[MessagePublic]


class CreateConversationRequest(BaseModel):
    title: str = Field(default="", max_length=200)


class RenameConversationRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)


class SaveMessageRequest(BaseModel):
    role: MessageRole
    content: str


class UpdateMessageRequest(BaseModel):
    content: str


class OkResponse(BaseModel):
    ok: bool
