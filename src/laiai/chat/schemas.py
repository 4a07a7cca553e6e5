from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, Field  # type: ignore[import-not-found]


TurnRole = Literal["user", "model"]


class TurnPart(BaseModel):
    text: str = ""


class HistoryTurn(BaseModel):
    role: TurnRole
    parts: list[TurnPart] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(p.text for p in self.parts)


class FileAttachment(BaseModel):
    name: str = ""
    # A file without data or mimeType is skipped, not rejected.
    mimeType: str | None = None
    data: str | None = None  # base64


class ChatRequest(BaseModel):
    message: str = ""
    history: list[HistoryTurn] = Field(default_factory=list)
    files: list[FileAttachment] | None = None


class ErrorResponse(BaseModel):
    error: str


# Outbound turn payload: plain text, or an ordered list of parts.


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class InlineDataPart:
    data: bytes
    mime_type: str


Part = TextPart | InlineDataPart


@dataclass(frozen=True)
class TextPayload:
    text: str


@dataclass(frozen=True)
class PartsPayload:
    parts: tuple[Part, ...]


Payload = TextPayload | PartsPayload
