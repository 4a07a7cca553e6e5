from __future__ import annotations

import datetime as dt
import json
import random
import re
import time
from dataclasses import dataclass
from functools import lru_cache

from pydantic import ValidationError as PydanticValidationError  # type: ignore[import-not-found]

from laiai.chat.exceptions import API_KEY_MISSING, ConfigurationError
from laiai.chat.repository import CompletionRepository
from laiai.commons.logging import logger
from laiai.core.settings import settings
from laiai.quotes.exceptions import QuoteGenerationError
from laiai.quotes.repository import STATIC_QUOTES
from laiai.quotes.schemas import GeneratedQuotePayload, Quote

QUOTE_PROMPT = """\
Generate a UNIQUE, short, inspiring, and positive quote in English and \
translate it to Lai Hakha (Chin).
Avoid common or overused quotes. Make it fresh and impactful.

STRICT OUTPUT FORMAT (JSON ONLY):
{
    "text": "English quote here",
    "translation": "Lai Hakha translation here",
    "author": "Author Name"
}

Ensure the translation uses deep, respectful Lai Hakha vocabulary as per your \
system instructions."""

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def get_daily_quote(today: dt.date | None = None) -> Quote:
    """Quote of the day: stable within a local calendar day."""
    day = today or dt.date.today()
    day_of_year = day.timetuple().tm_yday
    return STATIC_QUOTES[day_of_year % len(STATIC_QUOTES)]


def ticker_quotes(count: int = 10, *, rng: random.Random | None = None) -> list[Quote]:
    pool = list(STATIC_QUOTES)
    (rng or random.Random()).shuffle(pool)
    return pool[: max(0, count)]


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def parse_generated_quote(text: str, *, quote_id: int) -> Quote:
    raw = strip_code_fences(text)
    try:
        data = json.loads(raw)
        payload = GeneratedQuotePayload.model_validate(data)
    except (ValueError, PydanticValidationError) as exc:
        raise QuoteGenerationError("Failed to parse generated quote", str(exc)) from exc
    return Quote(id=quote_id, **payload.model_dump())


@dataclass(frozen=True)
class QuotesService:
    repo: CompletionRepository

    @classmethod
    def create(cls) -> "QuotesService":
        return cls(repo=CompletionRepository())

    async def generate_daily_quote(self) -> Quote:
        if not settings.completion_configured:
            raise ConfigurationError(API_KEY_MISSING)
        try:
            text = await self.repo.generate_text(prompt=QUOTE_PROMPT)
        except Exception as exc:
            logger.error("Error generating quote: %s", exc)
            raise QuoteGenerationError(
                "Failed to generate quote from AI service.", str(exc)
            ) from exc
        return parse_generated_quote(text, quote_id=int(time.time() * 1000))


@lru_cache
def get_quotes_service() -> QuotesService:
    return QuotesService.create()
