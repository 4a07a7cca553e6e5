from __future__ import annotations

from pydantic import BaseModel, Field  # type: ignore[import-not-found]


class Quote(BaseModel):
    id: int
    text: str = Field(min_length=1)
    translation: str = Field(min_length=1)
    author: str = Field(min_length=1)


class GeneratedQuotePayload(BaseModel):
    """Shape the completion service is asked to emit."""

    text: str = Field(min_length=1)
    translation: str = Field(min_length=1)
    author: str = Field(min_length=1)


class CachedQuote(BaseModel):
    date: str  # YYYY-MM-DD, local calendar
    quote: Quote


class TickerResponse(BaseModel):
    items: list[Quote]
