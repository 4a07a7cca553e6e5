from __future__ import annotations

import sqlalchemy as sa  # type: ignore[import-not-found]

from laiai.core.db import open_session
from laiai.core.settings import settings


async def check_db() -> tuple[bool, str | None]:
    try:
        async with open_session() as session:
            await session.execute(sa.text("SELECT 1"))
        return True, None
    except Exception as exc:
        return False, str(exc)


def check_completion() -> tuple[bool, str | None]:
    # Configuration only: no tokens are spent on a health probe.
    if not settings.completion_configured:
        return False, "not_configured"
    return True, None
