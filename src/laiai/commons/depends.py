from __future__ import annotations

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from laiai.core.db import open_session


async def database_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session. Routes commit explicitly; anything else rolls back."""
    async with open_session() as session:
        yield session
