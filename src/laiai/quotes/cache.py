"""
Daily quote cache in client-local storage.

Read-through, keyed by the local calendar date. A regenerate bypasses the
read and overwrites the entry. Callers serialize regenerations, so there is a
single writer.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from pydantic import ValidationError as PydanticValidationError  # type: ignore[import-not-found]

from laiai.commons.exceptions import BaseServiceException
from laiai.commons.logging import logger
from laiai.commons.storage import LocalStorage
from laiai.quotes.schemas import CachedQuote, Quote
from laiai.quotes.service import get_daily_quote

DAILY_QUOTE_KEY = "lai_ai_daily_quote"


@dataclass
class DailyQuoteCache:
    storage: LocalStorage
    generate: Callable[[], Awaitable[Quote]]
    today: Callable[[], dt.date] = field(default=dt.date.today)

    def read(self) -> CachedQuote | None:
        data = self.storage.get_json(DAILY_QUOTE_KEY)
        if data is None:
            return None
        try:
            return CachedQuote.model_validate(data)
        except PydanticValidationError:
            logger.warning("Ignoring malformed daily quote cache entry")
            return None

    def write(self, quote: Quote) -> None:
        entry = CachedQuote(date=self.today().isoformat(), quote=quote)
        self.storage.set_json(DAILY_QUOTE_KEY, entry.model_dump(mode="json"))

    async def get_or_generate(self, *, regenerate: bool = False) -> Quote:
        today = self.today()
        if not regenerate:
            cached = self.read()
            if cached is not None and cached.date == today.isoformat():
                return cached.quote
        try:
            quote = await self.generate()
        except BaseServiceException as exc:
            # Keep whatever is cached; show the static quote of the day.
            logger.warning("Quote generation failed, using static quote: %s", exc.message)
            return get_daily_quote(today)
        self.write(quote)
        return quote
