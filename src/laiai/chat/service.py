from __future__ import annotations

import base64
import binascii
from collections.abc import AsyncIterator
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from pydantic import ValidationError as PydanticValidationError  # type: ignore[import-not-found]

from laiai.chat.exceptions import (
    API_KEY_MISSING,
    ConfigurationError,
    StreamInterruptedError,
    UpstreamError,
    ValidationError,
)
from laiai.chat.repository import CompletionRepository
from laiai.chat.sanitizer import sanitize_history
from laiai.chat.schemas import (
    ChatRequest,
    FileAttachment,
    InlineDataPart,
    Part,
    PartsPayload,
    Payload,
    TextPart,
    TextPayload,
)
from laiai.commons.logging import logger
from laiai.core.settings import settings


def parse_chat_request(raw: Any) -> ChatRequest:
    try:
        return ChatRequest.model_validate(raw)
    except PydanticValidationError as exc:
        raise ValidationError("Invalid chat request", str(exc)) from exc


def _decode_file(f: FileAttachment) -> InlineDataPart | None:
    if not f.data or not f.mimeType:
        return None
    data = f.data
    # Browsers hand out data URLs; keep only the payload.
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError(f"Invalid base64 data for file {f.name!r}", str(exc)) from exc
    return InlineDataPart(data=raw, mime_type=f.mimeType)


def build_payload(message: str, files: list[FileAttachment] | None) -> Payload:
    """
    Bare text when there are no files; otherwise an optional leading text part
    followed by one inline-data part per valid file.
    """
    if not files:
        return TextPayload(text=message)
    parts: list[Part] = []
    if message:
        parts.append(TextPart(text=message))
    for f in files:
        part = _decode_file(f)
        if part is not None:
            parts.append(part)
    return PartsPayload(parts=tuple(parts))


@dataclass(frozen=True)
class ChatService:
    repo: CompletionRepository

    @classmethod
    def create(cls) -> "ChatService":
        return cls(repo=CompletionRepository())

    def ensure_configured(self) -> None:
        if not settings.completion_configured:
            logger.error("Error: completion API key is missing")
            raise ConfigurationError(API_KEY_MISSING)

    async def open_stream(self, req: ChatRequest) -> AsyncIterator[str]:
        """
        Start the completion and return an iterator over its text chunks.

        The first chunk is pulled eagerly so that failures before any byte is
        relayed surface as UpstreamError (a JSON 500) instead of a broken
        stream. Failures after that point raise StreamInterruptedError from
        inside the iterator.
        """
        self.ensure_configured()
        history = sanitize_history(req.history)
        payload = build_payload(req.message, req.files)
        logger.info(
            "Chat request: %d chars, %d history turns, %d files",
            len(req.message),
            len(history),
            len(req.files or []),
        )

        upstream = self.repo.stream_chat(history=history, payload=payload)
        try:
            first: str | None = await upstream.__anext__()
        except StopAsyncIteration:
            first = None
        except Exception as exc:
            logger.exception("Chat API Error", exc_info=exc)
            raise UpstreamError(str(exc) or "Internal Server Error") from exc

        return _relay(first, upstream)


async def _relay(first: str | None, upstream: AsyncIterator[str]) -> AsyncIterator[str]:
    if first is None:
        return
    yield first
    try:
        async for chunk in upstream:
            yield chunk
    except Exception as exc:
        logger.exception("Stream Error", exc_info=exc)
        raise StreamInterruptedError("Stream interrupted", str(exc)) from exc


@lru_cache
def get_chat_service() -> ChatService:
    return ChatService.create()
