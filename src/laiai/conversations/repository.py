from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from laiai.commons.ids import new_id
from laiai.conversations.models import Conversation, Message


def _owned_conversation_ids(user_id: UUID) -> sa.Select:
    return sa.select(Conversation.id).where(Conversation.user_id == user_id)


@dataclass(frozen=True)
class ConversationsRepository:
    async def list_for_user(
        self,
        session: AsyncSession,
        *,
        user_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Conversation]:
        stmt = (
            sa.select(Conversation)
            .where(Conversation.user_id == user_id)
            .order_by(Conversation.updated_at.desc(), Conversation.created_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        res = await session.execute(stmt)
        return list(res.scalars().all())

    async def get_for_user(
        self, session: AsyncSession, *, user_id: UUID, conversation_id: UUID
    ) -> Conversation | None:
        stmt = (
            sa.select(Conversation)
            .where(Conversation.id == conversation_id)
            .where(Conversation.user_id == user_id)
        )
        res = await session.execute(stmt)
        return res.scalar_one_or_none()

    async def list_messages(
        self, session: AsyncSession, *, user_id: UUID, conversation_id: UUID
    ) -> list[Message]:
        stmt = (
            sa.select(Message)
            .where(Message.conversation_id == conversation_id)
            .where(Message.conversation_id.in_(_owned_conversation_ids(user_id)))
            .order_by(Message.created_at.asc(), Message.id.asc())
        )
        res = await session.execute(stmt)
        return list(res.scalars().all())

    async def create_conversation(
        self, session: AsyncSession, *, user_id: UUID, title: str
    ) -> Conversation:
        now = dt.datetime.now(dt.UTC)
        c = Conversation(
            id=new_id(),
            user_id=user_id,
            title=title,
            created_at=now,
            updated_at=now,
        )
        session.add(c)
        await session.flush()
        return c

    async def append_message(
        self,
        session: AsyncSession,
        *,
        conversation_id: UUID,
        role: str,
        content: str,
    ) -> Message:
        m = Message(
            id=new_id(),
            conversation_id=conversation_id,
            role=role,
            content=content,
            created_at=dt.datetime.now(dt.UTC),
        )
        session.add(m)
        await session.flush()
        return m

    async def touch_conversation(
        self, session: AsyncSession, *, conversation_id: UUID
    ) -> None:
        await session.execute(
            sa.update(Conversation)
            .where(Conversation.id == conversation_id)
            .values(updated_at=dt.datetime.now(dt.UTC))
        )
        await session.flush()

    async def update_message(
        self, session: AsyncSession, *, user_id: UUID, message_id: UUID, content: str
    ) -> int:
        stmt = (
            sa.update(Message)
            .where(Message.id == message_id)
            .where(Message.conversation_id.in_(_owned_conversation_ids(user_id)))
            .values(content=content)
        )
        res = await session.execute(stmt)
        await session.flush()
        return int(res.rowcount or 0)

    async def update_title(
        self, session: AsyncSession, *, user_id: UUID, conversation_id: UUID, title: str
    ) -> int:
        stmt = (
            sa.update(Conversation)
            .where(Conversation.id == conversation_id)
            .where(Conversation.user_id == user_id)
            .values(title=title)
        )
        res = await session.execute(stmt)
        await session.flush()
        return int(res.rowcount or 0)

    async def delete_conversation(
        self, session: AsyncSession, *, user_id: UUID, conversation_id: UUID
    ) -> int:
        # messages go with it (ON DELETE CASCADE)
        stmt = (
            sa.delete(Conversation)
            .where(Conversation.id == conversation_id)
            .where(Conversation.user_id == user_id)
        )
        res = await session.execute(stmt)
        await session.flush()
        return int(res.rowcount or 0)

    async def search_titles(
        self, session: AsyncSession, *, user_id: UUID, query: str
    ) -> list[Conversation]:
        stmt = (
            sa.select(Conversation)
            .where(Conversation.user_id == user_id)
            .where(Conversation.title.icontains(query, autoescape=True))
        )
        res = await session.execute(stmt)
        return list(res.scalars().all())

    async def search_message_conversation_ids(
        self, session: AsyncSession, *, query: str
    ) -> list[UUID]:
        stmt = (
            sa.select(Message.conversation_id)
            .where(Message.content.icontains(query, autoescape=True))
            .distinct()
        )
        res = await session.execute(stmt)
        return list(res.scalars().all())

    async def list_by_ids_for_user(
        self, session: AsyncSession, *, user_id: UUID, conversation_ids: Iterable[UUID]
    ) -> list[Conversation]:
        ids = list(conversation_ids)
        if not ids:
            return []
        stmt = (
            sa.select(Conversation)
            .where(Conversation.user_id == user_id)
            .where(Conversation.id.in_(ids))
        )
        res = await session.execute(stmt)
        return list(res.scalars().all())
