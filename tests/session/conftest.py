"""
Session controller fixtures.

The gateway is faked with `httpx.MockTransport` (real chunked bodies, no
server), and durable storage with an in-memory persistence client.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from uuid import UUID

import httpx
import pytest  # type: ignore[import-not-found]
from uuid6 import uuid7  # type: ignore[import-not-found]

from laiai.conversations.schemas import ConversationPublic, MessagePublic
from laiai.session.controller import SessionController

USER_ID = UUID("00000000-0000-0000-0000-000000000001")


class FakePersistence:
    def __init__(self) -> None:
        self.conversations: dict[UUID, ConversationPublic] = {}
        self.messages: dict[UUID, MessagePublic] = {}
        self.fail_saves = False
        self.fail_updates = False
        self.create_delay = 0.0
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def _now(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    async def create_conversation(self, title: str) -> ConversationPublic | None:
        if self.create_delay:
            await asyncio.sleep(self.create_delay)
        now = self._now()
        c = ConversationPublic(
            id=uuid7(), user_id=USER_ID, title=title, created_at=now, updated_at=now
        )
        self.conversations[c.id] = c
        return c

    async def save_message(
        self, conversation_id: UUID, role: str, content: str
    ) -> MessagePublic | None:
        if self.fail_saves or conversation_id not in self.conversations:
            return None
        m = MessagePublic(
            id=uuid7(),
            conversation_id=conversation_id,
            role=role,  # type: ignore[arg-type]
            content=content,
            created_at=self._now(),
        )
        self.messages[m.id] = m
        return m

    async def update_message(self, message_id: UUID, content: str) -> bool:
        m = self.messages.get(message_id)
        if m is None or self.fail_updates:
            return False
        self.messages[message_id] = m.model_copy(update={"content": content})
        return True

    async def get_conversation(self, conversation_id: UUID) -> ConversationPublic | None:
        return self.conversations.get(conversation_id)

    async def get_messages(self, conversation_id: UUID) -> list[MessagePublic]:
        items = [m for m in self.messages.values() if m.conversation_id == conversation_id]
        return sorted(items, key=lambda m: m.created_at)

    def stored(self, conversation_id: UUID) -> list[tuple[str, str]]:
        return [
            (m.role, m.content)
            for m in sorted(self.messages.values(), key=lambda m: m.created_at)
            if m.conversation_id == conversation_id
        ]


@pytest.fixture()
def persistence() -> FakePersistence:
    return FakePersistence()


@pytest.fixture()
def make_controller(persistence: FakePersistence):  # type: ignore[no-untyped-def]
    def _make(handler, **kwargs) -> SessionController:  # type: ignore[no-untyped-def]
        http = httpx.AsyncClient(
            transport=httpx.MockTransport(handler), base_url="http://test"
        )
        return SessionController(http=http, persistence=persistence, **kwargs)  # type: ignore[arg-type]

    return _make
