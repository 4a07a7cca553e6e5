from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status

from laiai.commons.exceptions import (
    BaseCoreException,
    BaseServiceException,
    BaseServiceNotFoundException,
    BaseServiceUnProcessableException,
)
from laiai.commons.logging import logger


def status_for(exc: BaseServiceException) -> int:
    if isinstance(exc, BaseServiceNotFoundException):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, BaseServiceUnProcessableException):
        return status.HTTP_422_UNPROCESSABLE_CONTENT
    return status.HTTP_400_BAD_REQUEST


def _body(request: Request, code: int, message: str, details: str | None) -> dict:
    return {
        "exception": {
            "code": code,
            "message": message,
            "details": details,
            "path": request.url.path,
            "method": request.method,
        }
    }


def configure_global_exception_handlers(app: FastAPI) -> FastAPI:
    @app.exception_handler(BaseServiceException)
    async def service_exception_handler(
        request: Request, exc: BaseServiceException
    ) -> JSONResponse:
        code = status_for(exc)
        return JSONResponse(
            status_code=code, content=_body(request, code, exc.message, exc.details)
        )

    @app.exception_handler(BaseCoreException)
    async def core_exception_handler(
        request: Request, exc: BaseCoreException
    ) -> JSONResponse:
        # Infrastructure (DB) failures: details stay in the log.
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details)
        code = status.HTTP_503_SERVICE_UNAVAILABLE
        return JSONResponse(
            status_code=code, content=_body(request, code, exc.message, None)
        )

    return app
