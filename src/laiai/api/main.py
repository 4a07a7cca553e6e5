from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware  # type: ignore[import-not-found]

from laiai.api.exceptions import configure_global_exception_handlers
from laiai.api.routers import configure_routers
from laiai.commons.logging import logger
from laiai.core.db import database_manager
from laiai.core.settings import settings


def cors_origins(raw: str) -> list[str]:
    # Be forgiving about localhost vs 127.0.0.1, since devs commonly use either.
    origins: list[str] = []
    for o in (o.strip() for o in raw.split(",")):
        if not o:
            continue
        origins.append(o)
        if o.startswith("http://localhost:"):
            origins.append(o.replace("http://localhost:", "http://127.0.0.1:", 1))
        elif o.startswith("http://127.0.0.1:"):
            origins.append(o.replace("http://127.0.0.1:", "http://localhost:", 1))
    # De-dupe while preserving order.
    return list(dict.fromkeys(origins))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if not settings.completion_configured:
        logger.warning("GEMINI_API_KEY is not set. AI features will not work.")
    yield
    await database_manager.shutdown()


def build_app() -> FastAPI:
    app = FastAPI(title=settings.API_TITLE, version=settings.API_VERSION, lifespan=lifespan)
    origins = cors_origins(str(settings.CORS_ORIGINS))
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    configure_routers(app)
    configure_global_exception_handlers(app)
    return app


app = build_app()
