from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import APIRouter, Depends, Request  # type: ignore[import-not-found]
from fastapi.responses import JSONResponse, StreamingResponse  # type: ignore[import-not-found]
from starlette import status  # type: ignore[import-not-found]

from laiai.chat.exceptions import ChatServiceException, ValidationError
from laiai.chat.schemas import ErrorResponse
from laiai.chat.service import ChatService, get_chat_service, parse_chat_request

router = APIRouter(prefix="/api", tags=["chat"])


def _error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=message).model_dump(),
    )


async def _encode(chunks: AsyncIterator[str]) -> AsyncIterator[bytes]:
    async for chunk in chunks:
        yield chunk.encode("utf-8")


@router.post("/chat", responses={500: {"model": ErrorResponse}})
async def chat(
    request: Request,
    svc: Annotated[ChatService, Depends(get_chat_service)],
):
    # The gateway never lets an exception escape before streaming starts:
    # everything maps to {"error": ...} with a 500.
    try:
        svc.ensure_configured()
        try:
            raw = await request.json()
        except ValueError as exc:
            raise ValidationError(f"Invalid JSON body: {exc}", str(exc)) from exc
        req = parse_chat_request(raw)
        chunks = await svc.open_stream(req)
    except ChatServiceException as exc:
        return _error(exc.message)

    return StreamingResponse(
        _encode(chunks), media_type="text/plain; charset=utf-8"
    )
