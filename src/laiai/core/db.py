"""
Database manager (async SQLAlchemy).

A shared manager owns the engine and sessionmaker; a dependency yields
sessions from it.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (  # type: ignore[import-not-found]
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase  # type: ignore[import-not-found]

from laiai.commons.exceptions import BaseCoreException
from laiai.commons.logging import logger
from laiai.core.settings import settings


class DatabaseException(BaseCoreException):
    pass


class Base(DeclarativeBase):
    """Declarative base for every table in the app."""


def build_dsn() -> str:
    if settings.LAIAI_DATABASE_URL:
        return settings.LAIAI_DATABASE_URL
    # psycopg async driver
    return (
        "postgresql+psycopg://"
        f"{settings.LAIAI_DB_USER}:{settings.LAIAI_DB_PASSWORD}"
        f"@{settings.LAIAI_DB_HOST}:{settings.LAIAI_DB_PORT}"
        f"/{settings.LAIAI_DB_NAME}"
    )


class DatabaseManager:
    def __init__(self) -> None:
        self.engine: AsyncEngine | None = None
        self.sessionmaker: async_sessionmaker[AsyncSession] | None = None

    async def initialize(self) -> None:
        if self.engine is not None:
            return
        try:
            self.engine = create_async_engine(
                build_dsn(), echo=settings.LAIAI_DB_ECHO, pool_pre_ping=True
            )
            self.sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False)
            logger.info("Database initialized")
        except Exception as exc:
            raise DatabaseException("Failed to initialize database", str(exc)) from exc

    async def shutdown(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.sessionmaker = None
        logger.info("Database shut down")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if self.sessionmaker is None:
            raise DatabaseException("Database is not initialized")
        async with self.sessionmaker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()


database_manager = DatabaseManager()


@asynccontextmanager
async def open_session() -> AsyncGenerator[AsyncSession, None]:
    """Initialize lazily, then hand out one session (used outside request scope)."""
    await database_manager.initialize()
    async with database_manager.session() as session:
        yield session
