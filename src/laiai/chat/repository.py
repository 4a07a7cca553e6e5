from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass

from google import genai  # type: ignore[import-not-found]
from google.genai import types  # type: ignore[import-not-found]

from laiai.chat.persona import PERSONA_PROMPT
from laiai.chat.schemas import (
    HistoryTurn,
    InlineDataPart,
    PartsPayload,
    Payload,
    TextPart,
)
from laiai.core.settings import settings


def to_contents(history: Sequence[HistoryTurn]) -> list[types.Content]:
    return [
        types.Content(
            role=t.role,
            parts=[types.Part.from_text(text=p.text) for p in t.parts],
        )
        for t in history
    ]


def to_message(payload: Payload) -> str | list[types.Part]:
    if isinstance(payload, PartsPayload):
        parts: list[types.Part] = []
        for p in payload.parts:
            if isinstance(p, TextPart):
                parts.append(types.Part.from_text(text=p.text))
            elif isinstance(p, InlineDataPart):
                parts.append(types.Part.from_bytes(data=p.data, mime_type=p.mime_type))
        return parts
    return payload.text


@dataclass(frozen=True)
class CompletionRepository:
    """Data layer for the external completion service (Gemini).

    No error handling here (repository rule); the service decides fallbacks.
    """

    system_instruction: str = PERSONA_PROMPT

    def _client(self) -> genai.Client:
        api_key = settings.completion_api_key
        if not api_key:
            raise RuntimeError("completion API key is not configured")
        return genai.Client(api_key=api_key)

    def _config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=self.system_instruction,
            temperature=float(settings.GEMINI_TEMPERATURE),
        )

    async def stream_chat(
        self, *, history: Sequence[HistoryTurn], payload: Payload
    ) -> AsyncIterator[str]:
        """
        Open a chat seeded with `history`, send `payload`, yield text deltas.
        """
        chat = self._client().aio.chats.create(
            model=settings.GEMINI_MODEL,
            config=self._config(),
            history=to_contents(history),
        )
        stream = await chat.send_message_stream(to_message(payload))
        async for chunk in stream:
            text = chunk.text
            if text:
                yield text

    async def generate_text(self, *, prompt: str) -> str:
        resp = await self._client().aio.models.generate_content(
            model=settings.GEMINI_MODEL,
            contents=prompt,
            config=self._config(),
        )
        return str(resp.text or "")
