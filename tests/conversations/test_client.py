"""
PersistenceClient against an in-memory repository.

The client is the error boundary for durable storage, so most cases here check
the sentinel it returns when the store fails or the identity is missing.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest  # type: ignore[import-not-found]
from uuid6 import uuid7  # type: ignore[import-not-found]

from laiai.conversations.client import PersistenceClient, merge_search_results
from laiai.conversations.models import Conversation, Message
from laiai.conversations.schemas import ConversationPublic

OWNER = UUID("00000000-0000-0000-0000-000000000001")
STRANGER = UUID("00000000-0000-0000-0000-000000000002")
T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


class FakeSession:
    def __init__(self) -> None:
        self.commits = 0

    async def commit(self) -> None:
        self.commits += 1


class FakeRepo:
    def __init__(self) -> None:
        self.conversations: dict[UUID, Conversation] = {}
        self.messages: dict[UUID, Message] = {}
        self.fail: set[str] = set()
        self._tick = 0

    def _now(self) -> datetime:
        self._tick += 1
        return T0 + timedelta(minutes=self._tick)

    def _check(self, op: str) -> None:
        if op in self.fail:
            raise RuntimeError(f"{op} failed")

    def _owned(self, user_id: UUID, conversation_id: UUID) -> Conversation | None:
        c = self.conversations.get(conversation_id)
        return c if c is not None and c.user_id == user_id else None

    async def create_conversation(self, session, *, user_id, title):  # type: ignore[no-untyped-def]
        self._check("create_conversation")
        now = self._now()
        c = Conversation(id=uuid7(), user_id=user_id, title=title, created_at=now, updated_at=now)
        self.conversations[c.id] = c
        return c

    async def list_for_user(self, session, *, user_id, limit=None, offset=0):  # type: ignore[no-untyped-def]
        self._check("list_for_user")
        items = [c for c in self.conversations.values() if c.user_id == user_id]
        return sorted(items, key=lambda c: c.updated_at, reverse=True)

    async def get_for_user(self, session, *, user_id, conversation_id):  # type: ignore[no-untyped-def]
        self._check("get_for_user")
        return self._owned(user_id, conversation_id)

    async def list_messages(self, session, *, user_id, conversation_id):  # type: ignore[no-untyped-def]
        self._check("list_messages")
        if self._owned(user_id, conversation_id) is None:
            return []
        items = [m for m in self.messages.values() if m.conversation_id == conversation_id]
        return sorted(items, key=lambda m: m.created_at)

    async def append_message(self, session, *, conversation_id, role, content):  # type: ignore[no-untyped-def]
        self._check("append_message")
        m = Message(
            id=uuid7(),
            conversation_id=conversation_id,
            role=role,
            content=content,
            created_at=self._now(),
        )
        self.messages[m.id] = m
        return m

    async def touch_conversation(self, session, *, conversation_id):  # type: ignore[no-untyped-def]
        self._check("touch_conversation")
        self.conversations[conversation_id].updated_at = self._now()

    async def update_message(self, session, *, user_id, message_id, content):  # type: ignore[no-untyped-def]
        self._check("update_message")
        m = self.messages.get(message_id)
        if m is None or self._owned(user_id, m.conversation_id) is None:
            return 0
        m.content = content
        return 1

    async def update_title(self, session, *, user_id, conversation_id, title):  # type: ignore[no-untyped-def]
        self._check("update_title")
        c = self._owned(user_id, conversation_id)
        if c is None:
            return 0
        c.title = title
        return 1

    async def delete_conversation(self, session, *, user_id, conversation_id):  # type: ignore[no-untyped-def]
        self._check("delete_conversation")
        if self._owned(user_id, conversation_id) is None:
            return 0
        del self.conversations[conversation_id]
        for mid in [m.id for m in self.messages.values() if m.conversation_id == conversation_id]:
            del self.messages[mid]
        return 1

    async def search_titles(self, session, *, user_id, query):  # type: ignore[no-untyped-def]
        self._check("search_titles")
        q = query.lower()
        return [
            c for c in self.conversations.values()
            if c.user_id == user_id and q in (c.title or "").lower()
        ]

    async def search_message_conversation_ids(self, session, *, query):  # type: ignore[no-untyped-def]
        self._check("search_message_conversation_ids")
        q = query.lower()
        return list({m.conversation_id for m in self.messages.values() if q in m.content.lower()})

    async def list_by_ids_for_user(self, session, *, user_id, conversation_ids):  # type: ignore[no-untyped-def]
        self._check("list_by_ids_for_user")
        return [c for cid in conversation_ids if (c := self._owned(user_id, cid)) is not None]


@pytest.fixture()
def repo() -> FakeRepo:
    return FakeRepo()


@pytest.fixture()
def sessions() -> list[FakeSession]:
    return []


def _client(repo: FakeRepo, sessions: list[FakeSession], user_id: UUID | None = OWNER) -> PersistenceClient:
    @asynccontextmanager
    async def factory():  # type: ignore[no-untyped-def]
        s = FakeSession()
        sessions.append(s)
        yield s

    return PersistenceClient(user_id=user_id, repo=repo, session_factory=factory)  # type: ignore[arg-type]


@pytest.mark.anyio
async def test_create_and_list(repo, sessions) -> None:  # type: ignore[no-untyped-def]
    client = _client(repo, sessions)

    a = await client.create_conversation("first")
    b = await client.create_conversation("second")

    assert a is not None and b is not None
    assert a.user_id == OWNER
    assert [c.title for c in await client.get_conversations()] == ["second", "first"]
    assert sessions[0].commits == 1


@pytest.mark.anyio
async def test_save_message_bumps_conversation_activity(repo, sessions) -> None:  # type: ignore[no-untyped-def]
    client = _client(repo, sessions)
    a = await client.create_conversation("a")
    await client.create_conversation("b")

    m = await client.save_message(a.id, "user", "hello")  # type: ignore[union-attr]

    assert m is not None and m.content == "hello"
    assert [c.title for c in await client.get_conversations()] == ["a", "b"]
    assert [x.content for x in await client.get_messages(a.id)] == ["hello"]  # type: ignore[union-attr]


@pytest.mark.anyio
async def test_touch_failure_keeps_saved_message(repo, sessions) -> None:  # type: ignore[no-untyped-def]
    client = _client(repo, sessions)
    c = await client.create_conversation("a")
    repo.fail.add("touch_conversation")

    m = await client.save_message(c.id, "model", "kept")  # type: ignore[union-attr]

    assert m is not None
    assert [x.content for x in await client.get_messages(c.id)] == ["kept"]  # type: ignore[union-attr]


@pytest.mark.anyio
async def test_save_message_to_foreign_conversation(repo, sessions) -> None:  # type: ignore[no-untyped-def]
    c = await _client(repo, sessions).create_conversation("mine")
    stranger = _client(repo, sessions, STRANGER)

    assert await stranger.save_message(c.id, "user", "x") is None  # type: ignore[union-attr]
    assert await stranger.get_conversation(c.id) is None  # type: ignore[union-attr]
    assert await stranger.get_messages(c.id) == []  # type: ignore[union-attr]
    assert repo.messages == {}


@pytest.mark.anyio
async def test_missing_identity_returns_sentinels(repo, sessions) -> None:  # type: ignore[no-untyped-def]
    client = _client(repo, sessions, None)
    cid = uuid7()

    assert await client.create_conversation("x") is None
    assert await client.get_conversations() == []
    assert await client.get_conversation(cid) is None
    assert await client.get_messages(cid) == []
    assert await client.save_message(cid, "user", "x") is None
    assert await client.update_message(cid, "x") is False
    assert await client.update_conversation_title(cid, "x") is False
    assert await client.delete_conversation(cid) is False
    assert await client.search_conversations("x") == []
    assert sessions == []


@pytest.mark.anyio
async def test_store_failures_return_sentinels(repo, sessions) -> None:  # type: ignore[no-untyped-def]
    client = _client(repo, sessions)
    c = await client.create_conversation("a")
    repo.fail.update(
        {
            "create_conversation",
            "list_for_user",
            "get_for_user",
            "list_messages",
            "update_message",
            "update_title",
            "delete_conversation",
            "search_titles",
        }
    )

    assert await client.create_conversation("b") is None
    assert await client.get_conversations() == []
    assert await client.get_conversation(c.id) is None  # type: ignore[union-attr]
    assert await client.get_messages(c.id) == []  # type: ignore[union-attr]
    assert await client.save_message(c.id, "user", "x") is None  # type: ignore[union-attr]
    assert await client.update_message(uuid7(), "x") is False
    assert await client.update_conversation_title(c.id, "x") is False  # type: ignore[union-attr]
    assert await client.delete_conversation(c.id) is False  # type: ignore[union-attr]
    assert await client.search_conversations("a") == []


@pytest.mark.anyio
async def test_update_title_and_message(repo, sessions) -> None:  # type: ignore[no-untyped-def]
    client = _client(repo, sessions)
    c = await client.create_conversation("old")
    m = await client.save_message(c.id, "user", "typo")  # type: ignore[union-attr]

    assert await client.update_conversation_title(c.id, "new") is True  # type: ignore[union-attr]
    assert await client.update_message(m.id, "fixed") is True  # type: ignore[union-attr]
    assert (await client.get_conversation(c.id)).title == "new"  # type: ignore[union-attr]
    assert [x.content for x in await client.get_messages(c.id)] == ["fixed"]  # type: ignore[union-attr]

    assert await client.update_message(uuid7(), "nope") is False


@pytest.mark.anyio
async def test_delete_removes_messages(repo, sessions) -> None:  # type: ignore[no-untyped-def]
    client = _client(repo, sessions)
    c = await client.create_conversation("x")
    await client.save_message(c.id, "user", "hi")  # type: ignore[union-attr]

    assert await client.delete_conversation(c.id) is True  # type: ignore[union-attr]
    assert await client.delete_conversation(c.id) is False  # type: ignore[union-attr]
    assert repo.messages == {}


@pytest.mark.anyio
async def test_search_merges_title_and_content_matches(repo, sessions) -> None:  # type: ignore[no-untyped-def]
    client = _client(repo, sessions)
    by_title = await client.create_conversation("Pathian thu")
    by_content = await client.create_conversation("Other")
    both = await client.create_conversation("pathian le minung")
    await client.create_conversation("unrelated")
    await client.save_message(by_content.id, "user", "Pathian a dawtu")  # type: ignore[union-attr]
    await client.save_message(both.id, "model", "PATHIAN")  # type: ignore[union-attr]

    foreign = await _client(repo, sessions, STRANGER).create_conversation("pathian")

    found = await client.search_conversations("  pathian ")

    ids = [c.id for c in found]
    assert set(ids) == {by_title.id, by_content.id, both.id}  # type: ignore[union-attr]
    assert len(ids) == 3
    assert foreign.id not in ids  # type: ignore[union-attr]
    assert [c.updated_at for c in found] == sorted((c.updated_at for c in found), reverse=True)


@pytest.mark.anyio
async def test_blank_search_returns_nothing(repo, sessions) -> None:  # type: ignore[no-untyped-def]
    client = _client(repo, sessions)
    await client.create_conversation("x")
    assert await client.search_conversations("   ") == []


def test_merge_search_results_dedupes_by_id() -> None:
    cid = uuid7()
    a = ConversationPublic(id=cid, user_id=OWNER, title="a", created_at=T0, updated_at=T0)
    b = ConversationPublic(
        id=uuid7(), user_id=OWNER, title="b", created_at=T0, updated_at=T0 + timedelta(days=1)
    )

    merged = merge_search_results([a], [b, a])

    assert [c.title for c in merged] == ["b", "a"]
