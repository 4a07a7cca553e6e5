"""
Client-side chat session.

Owns the in-memory turn list and drives one turn at a time through

    IDLE -> SENDING -> STREAMING -> SETTLING -> IDLE
    SENDING | STREAMING -> ERRORED

SENDING appends the optimistic user turn and fires its persistence in the
background (conversation creation included); it never blocks the request.
STREAMING appends an assistant placeholder and grows it chunk by chunk.
SETTLING persists the assistant turn. Persistence failures are tolerated.

The only ways out of an in-flight turn are the header timeout, an explicit
`cancel()` (honoured while waiting for headers or for the next chunk) and
cancellation of the awaiting task. All of them unwind the placeholder and
leave the optimistic user turn.
"""

from __future__ import annotations

import asyncio
import codecs
import contextlib
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

import httpx  # type: ignore[import-not-found]

from laiai.commons.logging import logger
from laiai.conversations.client import PersistenceClient
from laiai.conversations.schemas import ConversationPublic
from laiai.core.settings import settings
from laiai.session.exceptions import (
    ChatCancelledError,
    ChatConfigurationError,
    ChatStreamInterruptedError,
    ChatTimeoutError,
    ChatUpstreamError,
    SessionBusyError,
    SessionError,
)
from laiai.session.schemas import Attachment, SessionState, Turn

CHAT_PATH = "/api/chat"

Listener = Callable[[list[Turn]], None]


def conversation_title(text: str, max_chars: int) -> str:
    t = text.strip()
    return t[:max_chars] + ("..." if len(t) > max_chars else "")


def display_text(text: str, attachments: Sequence[Attachment]) -> str:
    if not attachments:
        return text
    names = ", ".join(a.name for a in attachments)
    return f"{text}\n\n[Attached files: {names}]"


@dataclass
class SessionController:
    http: httpx.AsyncClient
    persistence: PersistenceClient
    timeout_s: float = field(default_factory=lambda: float(settings.CHAT_TIMEOUT_S))
    title_max_chars: int = field(default_factory=lambda: int(settings.TITLE_MAX_CHARS))
    turns: list[Turn] = field(default_factory=list)
    conversation: ConversationPublic | None = None
    state: SessionState = SessionState.IDLE
    error: SessionError | None = None
    listeners: list[Listener] = field(default_factory=list)
    _last_input: tuple[str, tuple[Attachment, ...]] | None = field(
        default=None, init=False, repr=False
    )
    _cancel: asyncio.Event | None = field(default=None, init=False, repr=False)
    _background: set[asyncio.Task[None]] = field(
        default_factory=set, init=False, repr=False
    )
    _creating: asyncio.Task[None] | None = field(default=None, init=False, repr=False)

    @property
    def in_flight(self) -> bool:
        return self.state in (
            SessionState.SENDING,
            SessionState.STREAMING,
            SessionState.SETTLING,
        )

    def subscribe(self, listener: Listener) -> None:
        self.listeners.append(listener)

    def _publish(self) -> None:
        snapshot = list(self.turns)
        for listener in self.listeners:
            listener(snapshot)

    def _spawn(self, coro: Awaitable[None]) -> asyncio.Task[None]:
        task = asyncio.ensure_future(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def drain(self) -> None:
        """Wait for background persistence started by earlier turns."""
        while self._background:
            await asyncio.wait(set(self._background))

    # -- turn lifecycle -------------------------------------------------------

    async def send(
        self, text: str, attachments: Sequence[Attachment] = ()
    ) -> Turn | None:
        """
        Run one full turn. Returns the assistant turn, or None when there is
        nothing to send. Raises a SessionError (also kept in `self.error`)
        after unwinding a failed attempt.
        """
        files = tuple(attachments)
        if not text.strip() and not files:
            return None
        if self.in_flight:
            raise SessionBusyError("A turn is already in flight")

        self.error = None
        self._last_input = (text, files)
        self._cancel = asyncio.Event()

        history = [t.as_history() for t in self.turns]
        user_turn = Turn(role="user", text=display_text(text, files))
        self.turns.append(user_turn)
        self.state = SessionState.SENDING
        self._publish()

        persisted = self._spawn(self._persist_user_turn(user_turn, title_source=text))

        body: dict[str, Any] = {"message": text, "history": history}
        if files:
            body["files"] = [f.as_wire() for f in files]

        placeholder: Turn | None = None
        try:
            response = await self._open_stream(body)
            try:
                await self._raise_for_status(response)
                placeholder = Turn(role="model", text="")
                self.turns.append(placeholder)
                self.state = SessionState.STREAMING
                self._publish()
                await self._consume(response, placeholder)
            finally:
                await response.aclose()
        except SessionError as exc:
            self._unwind(placeholder)
            self.error = exc
            self.state = SessionState.ERRORED
            self._publish()
            logger.warning("Chat error (%s): %s", exc.kind, exc.details or exc.message)
            raise
        except BaseException:
            # Cancelled by the caller (task teardown, wait_for): unwind and re-raise.
            self._unwind(placeholder)
            self.state = SessionState.IDLE
            self._publish()
            raise
        finally:
            self._cancel = None

        self.state = SessionState.SETTLING
        try:
            await self._settle(placeholder, persisted)
        finally:
            self.state = SessionState.IDLE
            self._publish()
        return placeholder

    async def retry(self) -> Turn | None:
        """Replay the last user input."""
        if self._last_input is None:
            return None
        text, files = self._last_input
        return await self.send(text, files)

    def cancel(self) -> bool:
        """Ask the in-flight turn to stop, even while the gateway is silent."""
        if self._cancel is None:
            return False
        self._cancel.set()
        return True

    def dismiss_error(self) -> None:
        self.error = None
        if self.state is SessionState.ERRORED:
            self.state = SessionState.IDLE

    # -- gateway --------------------------------------------------------------

    async def _open_stream(self, body: dict[str, Any]) -> httpx.Response:
        assert self._cancel is not None
        request = self.http.build_request("POST", CHAT_PATH, json=body)
        send = asyncio.ensure_future(self.http.send(request, stream=True))
        cancelled = asyncio.ensure_future(self._cancel.wait())
        try:
            done, _ = await asyncio.wait(
                {send, cancelled},
                timeout=self.timeout_s,
                return_when=asyncio.FIRST_COMPLETED,
            )
        except BaseException:
            await _abandon(send)
            raise
        finally:
            cancelled.cancel()

        if send in done:
            try:
                return send.result()
            except Exception as exc:
                raise ChatUpstreamError("Failed to send message", str(exc)) from exc

        await _abandon(send)
        if self._cancel.is_set():
            raise ChatCancelledError("Cancelled by user")
        raise ChatTimeoutError("TIMEOUT", f"no response within {self.timeout_s}s")

    async def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            await response.aread()
        except httpx.HTTPError as exc:
            raise ChatUpstreamError("Failed to send message", str(exc)) from exc
        error = ""
        try:
            data = response.json()
            if isinstance(data, dict):
                error = str(data.get("error") or "")
        except ValueError:
            pass
        error = error or "Failed to send message"
        if "API Key" in error:
            raise ChatConfigurationError(error, f"HTTP {response.status_code}")
        raise ChatUpstreamError(error, f"HTTP {response.status_code}")

    async def _consume(self, response: httpx.Response, turn: Turn) -> None:
        assert self._cancel is not None
        # Multi-byte sequences may be split across chunks.
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        chunks = response.aiter_bytes()
        try:
            while (raw := await self._next_chunk(chunks)) is not None:
                chunk = decoder.decode(raw)
                if chunk:
                    turn.text += chunk
                    self._publish()
            tail = decoder.decode(b"", final=True)
        except SessionError:
            raise
        except Exception as exc:
            raise ChatStreamInterruptedError("Stream interrupted", str(exc)) from exc
        if tail:
            turn.text += tail
            self._publish()

    async def _next_chunk(self, chunks: AsyncIterator[bytes]) -> bytes | None:
        """Next body chunk, None at the end. A stalled body still yields to cancel()."""
        assert self._cancel is not None
        if self._cancel.is_set():
            raise ChatCancelledError("Cancelled by user")
        pull = asyncio.ensure_future(_pull(chunks))
        cancelled = asyncio.ensure_future(self._cancel.wait())
        try:
            await asyncio.wait({pull, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancelled.cancel()
            if not pull.done():
                pull.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await pull
        if self._cancel.is_set():
            raise ChatCancelledError("Cancelled by user")
        return pull.result()

    def _unwind(self, placeholder: Turn | None) -> None:
        # A broken attempt keeps nothing of the assistant turn, partial text included.
        if placeholder is not None:
            self.turns = [t for t in self.turns if t is not placeholder]

    # -- persistence ----------------------------------------------------------

    async def _ensure_conversation(self, title_source: str) -> ConversationPublic | None:
        # One creation per session: concurrent callers share the pending task.
        if self.conversation is None and self._creating is None:
            title = conversation_title(title_source, self.title_max_chars)
            self._creating = asyncio.ensure_future(self._create_conversation(title))
        if self.conversation is None and self._creating is not None:
            await asyncio.shield(self._creating)
        return self.conversation

    async def _create_conversation(self, title: str) -> None:
        c = None
        try:
            c = await self.persistence.create_conversation(title)
        finally:
            # A reset or reload meanwhile leaves the result unclaimed.
            if self._creating is asyncio.current_task():
                if c is None:
                    logger.error("Failed to create conversation")
                    self._creating = None
                else:
                    self.conversation = c

    def _holds(self, turn: Turn) -> bool:
        return any(t is turn for t in self.turns)

    async def _persist_user_turn(self, turn: Turn, *, title_source: str) -> None:
        if not self._holds(turn):
            return
        conversation = await self._ensure_conversation(title_source or turn.text)
        if conversation is None or not self._holds(turn):
            return
        saved = await self.persistence.save_message(conversation.id, "user", turn.text)
        if saved is not None:
            self._attach_id(turn.local_id, str(saved.id))

    async def _settle(self, turn: Turn | None, persisted: asyncio.Task[None]) -> None:
        try:
            await persisted
        except Exception as exc:
            logger.warning("User turn was not persisted: %s", exc)
        if turn is None or not turn.text or self.conversation is None:
            return
        try:
            saved = await self.persistence.save_message(
                self.conversation.id, "model", turn.text
            )
        except Exception as exc:
            logger.warning("Assistant turn was not persisted: %s", exc)
            return
        if saved is not None:
            self._attach_id(turn.local_id, str(saved.id))

    def _attach_id(self, local_id: str, server_id: str) -> None:
        for t in self.turns:
            if t.local_id == local_id and t.id is None:
                t.id = server_id
                self._publish()
                return

    # -- conversation management ---------------------------------------------

    def new_conversation(self) -> None:
        if self.in_flight:
            raise SessionBusyError("A turn is already in flight")
        self.turns = []
        self.conversation = None
        self._creating = None
        self.error = None
        self.state = SessionState.IDLE
        self._publish()

    async def load_conversation(self, conversation_id: UUID) -> bool:
        if self.in_flight:
            raise SessionBusyError("A turn is already in flight")
        c = await self.persistence.get_conversation(conversation_id)
        if c is None:
            return False
        messages = await self.persistence.get_messages(conversation_id)
        self.conversation = c
        self._creating = None
        self.turns = [Turn(role=m.role, text=m.content, id=str(m.id)) for m in messages]
        self.error = None
        self.state = SessionState.IDLE
        self._publish()
        return True

    async def edit_message(self, index: int, content: str) -> bool:
        """Replace a stored turn's text in place. Unsaved turns are not editable."""
        turn = self.turns[index]
        if turn.id is None:
            return False
        previous, turn.text = turn.text, content
        self._publish()
        if await self.persistence.update_message(UUID(turn.id), content):
            return True
        # The store kept the old text; so does the turn list.
        turn.text = previous
        self._publish()
        return False


async def _abandon(task: asyncio.Future[httpx.Response]) -> None:
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        try:
            response = await task
        except httpx.HTTPError:
            return
        await response.aclose()


async def _pull(chunks: AsyncIterator[bytes]) -> bytes | None:
    try:
        return await chunks.__anext__()
    except StopAsyncIteration:
        return None
