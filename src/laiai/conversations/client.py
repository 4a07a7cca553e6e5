"""
Persistence client for conversations and messages.

Scoped to one identity. Every operation opens its own session and commits on
success. Store failures never propagate: they are logged and turned into a
sentinel (`None`, `False` or `[]`) so the chat never blocks on durable
storage.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from laiai.commons.logging import logger
from laiai.conversations.models import Conversation, Message
from laiai.conversations.repository import ConversationsRepository
from laiai.conversations.schemas import ConversationPublic, MessagePublic
from laiai.core.db import open_session

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


def to_conversation_public(c: Conversation) -> ConversationPublic:
    return ConversationPublic(
        id=c.id,
        user_id=c.user_id,
        title=c.title or "",
        created_at=c.created_at,
        updated_at=c.updated_at,
    )


def to_message_public(m: Message) -> MessagePublic:
    return MessagePublic(
        id=m.id,
        conversation_id=m.conversation_id,
        role=m.role,  # type: ignore[arg-type]
        content=m.content,
        created_at=m.created_at,
    )


def merge_search_results(
    *groups: Iterable[ConversationPublic],
) -> list[ConversationPublic]:
    """Union by conversation id, most recently active first."""
    merged: dict[UUID, ConversationPublic] = {}
    for group in groups:
        for c in group:
            merged.setdefault(c.id, c)
    return sorted(merged.values(), key=lambda c: c.updated_at, reverse=True)


@dataclass(frozen=True)
class PersistenceClient:
    user_id: UUID | None
    repo: ConversationsRepository = field(default_factory=ConversationsRepository)
    session_factory: SessionFactory = open_session

    @classmethod
    def for_user(cls, user) -> "PersistenceClient":  # type: ignore[no-untyped-def]
        return cls(user_id=getattr(user, "id", None))

    async def create_conversation(self, title: str) -> ConversationPublic | None:
        if self.user_id is None:
            return None
        try:
            async with self.session_factory() as session:
                c = await self.repo.create_conversation(
                    session, user_id=self.user_id, title=title
                )
                await session.commit()
                return to_conversation_public(c)
        except Exception as exc:
            logger.error("Error creating conversation: %s", exc)
            return None

    async def get_conversations(self) -> list[ConversationPublic]:
        if self.user_id is None:
            return []
        try:
            async with self.session_factory() as session:
                items = await self.repo.list_for_user(session, user_id=self.user_id)
                return [to_conversation_public(c) for c in items]
        except Exception as exc:
            logger.error("Error fetching conversations: %s", exc)
            return []

    async def get_conversation(self, conversation_id: UUID) -> ConversationPublic | None:
        if self.user_id is None:
            return None
        try:
            async with self.session_factory() as session:
                c = await self.repo.get_for_user(
                    session, user_id=self.user_id, conversation_id=conversation_id
                )
                return to_conversation_public(c) if c is not None else None
        except Exception as exc:
            logger.error("Error fetching conversation: %s", exc)
            return None

    async def get_messages(self, conversation_id: UUID) -> list[MessagePublic]:
        if self.user_id is None:
            return []
        try:
            async with self.session_factory() as session:
                items = await self.repo.list_messages(
                    session, user_id=self.user_id, conversation_id=conversation_id
                )
                return [to_message_public(m) for m in items]
        except Exception as exc:
            logger.error("Error fetching messages: %s", exc)
            return []

    async def save_message(
        self, conversation_id: UUID, role: str, content: str
    ) -> MessagePublic | None:
        if self.user_id is None:
            return None
        try:
            async with self.session_factory() as session:
                c = await self.repo.get_for_user(
                    session, user_id=self.user_id, conversation_id=conversation_id
                )
                if c is None:
                    logger.error("Error saving message: conversation %s not found", conversation_id)
                    return None
                m = await self.repo.append_message(
                    session, conversation_id=conversation_id, role=role, content=content
                )
                await session.commit()
                saved = to_message_public(m)
        except Exception as exc:
            logger.error("Error saving message: %s", exc)
            return None

        # Second, separate write: the message stands even if this one fails.
        try:
            async with self.session_factory() as session:
                await self.repo.touch_conversation(session, conversation_id=conversation_id)
                await session.commit()
        except Exception as exc:
            logger.warning("Error updating conversation timestamp: %s", exc)
        return saved

    async def update_message(self, message_id: UUID, content: str) -> bool:
        if self.user_id is None:
            return False
        try:
            async with self.session_factory() as session:
                n = await self.repo.update_message(
                    session, user_id=self.user_id, message_id=message_id, content=content
                )
                await session.commit()
                return n > 0
        except Exception as exc:
            logger.error("Error updating message: %s", exc)
            return False

    async def update_conversation_title(self, conversation_id: UUID, title: str) -> bool:
        if self.user_id is None:
            return False
        try:
            async with self.session_factory() as session:
                n = await self.repo.update_title(
                    session,
                    user_id=self.user_id,
                    conversation_id=conversation_id,
                    title=title,
                )
                await session.commit()
                return n > 0
        except Exception as exc:
            logger.error("Error updating conversation title: %s", exc)
            return False

    async def delete_conversation(self, conversation_id: UUID) -> bool:
        if self.user_id is None:
            return False
        try:
            async with self.session_factory() as session:
                n = await self.repo.delete_conversation(
                    session, user_id=self.user_id, conversation_id=conversation_id
                )
                await session.commit()
                return n > 0
        except Exception as exc:
            logger.error("Error deleting conversation: %s", exc)
            return False

    async def search_conversations(self, query: str) -> list[ConversationPublic]:
        """
        Title matches and message-content matches are two independent queries;
        content matches are resolved to their conversations (owner-filtered)
        and both sets are merged here.
        """
        q = query.strip()
        if self.user_id is None or not q:
            return []
        try:
            async with self.session_factory() as session:
                by_title = await self.repo.search_titles(
                    session, user_id=self.user_id, query=q
                )
                ids = await self.repo.search_message_conversation_ids(session, query=q)
                by_content = await self.repo.list_by_ids_for_user(
                    session, user_id=self.user_id, conversation_ids=ids
                )
        except Exception as exc:
            logger.error("Error searching conversations: %s", exc)
            return []
        return merge_search_results(
            (to_conversation_public(c) for c in by_title),
            (to_conversation_public(c) for c in by_content),
        )
