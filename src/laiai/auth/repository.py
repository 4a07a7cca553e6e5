from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from laiai.auth.models import AuthSession, User


@dataclass(frozen=True)
class AuthRepository:
    async def find_user_by_token_hash(
        self, session: AsyncSession, *, token_hash: str, now: dt.datetime
    ) -> User | None:
        """Owner of a live session (not revoked, not expired); disabled users excluded."""
        stmt = (
            sa.select(User)
            .join(AuthSession, AuthSession.user_id == User.id)
            .where(
                AuthSession.token_hash == token_hash,
                AuthSession.revoked_at.is_(None),
                AuthSession.expires_at > now,
                User.disabled_at.is_(None),
            )
            .limit(1)
        )
        return (await session.execute(stmt)).scalar_one_or_none()
