from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.exc import SQLAlchemyError  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from laiai.profiles.exceptions import ProfileStoreError
from laiai.profiles.repository import ProfilesRepository
from laiai.profiles.schemas import ProfilePublic, UpsertProfileRequest


def _to_public(p) -> ProfilePublic:  # type: ignore[no-untyped-def]
    return ProfilePublic(
        id=p.id,
        display_name=p.display_name,
        avatar_url=p.avatar_url,
        updated_at=p.updated_at,
    )


@dataclass(frozen=True)
class ProfilesService:
    repo: ProfilesRepository

    @classmethod
    def create(cls) -> "ProfilesService":
        return cls(repo=ProfilesRepository())

    async def get_profile(self, session: AsyncSession, *, user) -> ProfilePublic | None:
        p = await self.repo.get(session, user_id=user.id)
        return _to_public(p) if p is not None else None

    async def upsert_profile(
        self, session: AsyncSession, *, user, req: UpsertProfileRequest
    ) -> ProfilePublic:
        try:
            p = await self.repo.upsert(
                session,
                user_id=user.id,
                display_name=req.display_name,
                avatar_url=req.avatar_url,
            )
            await session.commit()
        except SQLAlchemyError as exc:
            raise ProfileStoreError("Failed to save profile", str(exc)) from exc
        return _to_public(p)


@lru_cache
def get_profiles_service() -> ProfilesService:
    return ProfilesService.create()
