from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query  # type: ignore[import-not-found]
from fastapi.responses import JSONResponse  # type: ignore[import-not-found]
from starlette import status  # type: ignore[import-not-found]

from laiai.chat.exceptions import ConfigurationError
from laiai.chat.schemas import ErrorResponse
from laiai.quotes.exceptions import QuoteGenerationError
from laiai.quotes.schemas import Quote, TickerResponse
from laiai.quotes.service import (
    QuotesService,
    get_daily_quote,
    get_quotes_service,
    ticker_quotes,
)

router = APIRouter(prefix="/api/quotes", tags=["quotes"])


@router.get("/daily", response_model=Quote)
async def daily_quote() -> Quote:
    return get_daily_quote()


@router.get("/ticker", response_model=TickerResponse)
async def ticker(count: int = Query(default=10, ge=1, le=20)) -> TickerResponse:
    return TickerResponse(items=ticker_quotes(count))


@router.post(
    "/generate",
    response_model=Quote,
    responses={500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def generate_quote(
    svc: Annotated[QuotesService, Depends(get_quotes_service)],
):
    try:
        return await svc.generate_daily_quote()
    except ConfigurationError as exc:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=exc.message).model_dump(),
        )
    except QuoteGenerationError as exc:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=ErrorResponse(error=exc.message).model_dump(),
        )
