from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from laiai.profiles.models import UserProfile


@dataclass(frozen=True)
class ProfilesRepository:
    async def get(self, session: AsyncSession, *, user_id: UUID) -> UserProfile | None:
        stmt = sa.select(UserProfile).where(UserProfile.id == user_id)
        res = await session.execute(stmt)
        return res.scalar_one_or_none()

    async def upsert(
        self,
        session: AsyncSession,
        *,
        user_id: UUID,
        display_name: str | None,
        avatar_url: str | None,
    ) -> UserProfile:
        now = dt.datetime.now(dt.UTC)
        p = await self.get(session, user_id=user_id)
        if p is None:
            p = UserProfile(id=user_id)
            session.add(p)
        p.display_name = display_name
        p.avatar_url = avatar_url
        p.updated_at = now
        await session.flush()
        return p
