from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query  # type: ignore[import-not-found]

from laiai.auth.depends import current_user_required
from laiai.conversations.client import PersistenceClient
from laiai.conversations.exceptions import (
    CONVERSATION_NOT_FOUND,
    MESSAGE_NOT_FOUND,
    ConversationNotFoundException,
    ConversationsServiceException,
)
from laiai.conversations.schemas import (
    ConversationPublic,
    CreateConversationRequest,
    GetConversationResponse,
    ListConversationsResponse,
    ListMessagesResponse,
    MessagePublic,
    OkResponse,
    RenameConversationRequest,
    SaveMessageRequest,
    UpdateMessageRequest,
)

router = APIRouter(prefix="/api", tags=["conversations"])


def get_persistence_client(
    user=Depends(current_user_required),
) -> PersistenceClient:
    return PersistenceClient.for_user(user)


Client = Annotated[PersistenceClient, Depends(get_persistence_client)]


def _parse_id(raw: str, *, not_found: str) -> UUID:
    try:
        return UUID(raw)
    except ValueError:
        raise ConversationNotFoundException("Not found", not_found)


@router.get("/conversations", response_model=ListConversationsResponse)
async def list_conversations(client: Client) -> ListConversationsResponse:
    return ListConversationsResponse(items=await client.get_conversations())


@router.post("/conversations", response_model=ConversationPublic)
async def create_conversation(
    req: CreateConversationRequest, client: Client
) -> ConversationPublic:
    c = await client.create_conversation(req.title)
    if c is None:
        raise ConversationsServiceException("Failed to create conversation")
    return c


@router.get("/conversations/search", response_model=ListConversationsResponse)
async def search_conversations(
    client: Client,
    q: str = Query(default="", max_length=200),
) -> ListConversationsResponse:
    return ListConversationsResponse(items=await client.search_conversations(q))


@router.get("/conversations/{conversation_id}", response_model=GetConversationResponse)
async def get_conversation(conversation_id: str, client: Client) -> GetConversationResponse:
    cid = _parse_id(conversation_id, not_found=CONVERSATION_NOT_FOUND)
    c = await client.get_conversation(cid)
    if c is None:
        raise ConversationNotFoundException("Conversation not found", CONVERSATION_NOT_FOUND)
    return GetConversationResponse(conversation=c, messages=await client.get_messages(cid))


@router.patch("/conversations/{conversation_id}", response_model=OkResponse)
async def rename_conversation(
    conversation_id: str, req: RenameConversationRequest, client: Client
) -> OkResponse:
    cid = _parse_id(conversation_id, not_found=CONVERSATION_NOT_FOUND)
    if not await client.update_conversation_title(cid, req.title):
        raise ConversationNotFoundException("Conversation not found", CONVERSATION_NOT_FOUND)
    return OkResponse(ok=True)


@router.delete("/conversations/{conversation_id}", response_model=OkResponse)
async def delete_conversation(conversation_id: str, client: Client) -> OkResponse:
    cid = _parse_id(conversation_id, not_found=CONVERSATION_NOT_FOUND)
    if not await client.delete_conversation(cid):
        raise ConversationNotFoundException("Conversation not found", CONVERSATION_NOT_FOUND)
    return OkResponse(ok=True)


@router.get(
    "/conversations/{conversation_id}/messages", response_model=ListMessagesResponse
)
async def list_messages(conversation_id: str, client: Client) -> ListMessagesResponse:
    cid = _parse_id(conversation_id, not_found=CONVERSATION_NOT_FOUND)
    return ListMessagesResponse(items=await client.get_messages(cid))


@router.post("/conversations/{conversation_id}/messages", response_model=MessagePublic)
async def save_message(
    conversation_id: str, req: SaveMessageRequest, client: Client
) -> MessagePublic:
    cid = _parse_id(conversation_id, not_found=CONVERSATION_NOT_FOUND)
    m = await client.save_message(cid, req.role, req.content)
    if m is None:
        raise ConversationNotFoundException("Conversation not found", CONVERSATION_NOT_FOUND)
    return m


@router.patch("/messages/{message_id}", response_model=OkResponse)
async def update_message(
    message_id: str, req: UpdateMessageRequest, client: Client
) -> OkResponse:
    mid = _parse_id(message_id, not_found=MESSAGE_NOT_FOUND)
    if not await client.update_message(mid, req.content):
        raise ConversationNotFoundException("Message not found", MESSAGE_NOT_FOUND)
    return OkResponse(ok=True)
