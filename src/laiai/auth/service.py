from __future__ import annotations

import datetime as dt
import hashlib
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from laiai.auth.models import User
from laiai.auth.repository import AuthRepository


def hash_session_token(token: str) -> str:
    # Only the hash is stored, never the bearer token itself.
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class AuthService:
    repo: AuthRepository

    @classmethod
    def create(cls) -> "AuthService":
        return cls(repo=AuthRepository())

    async def get_user_for_session_token(
        self, session: AsyncSession, *, token: str
    ) -> User | None:
        if not token.strip():
            return None
        return await self.repo.find_user_by_token_hash(
            session,
            token_hash=hash_session_token(token.strip()),
            now=dt.datetime.now(dt.UTC),
        )
