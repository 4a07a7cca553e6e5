from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Cookie, Depends, Header, HTTPException  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]
from starlette import status  # type: ignore[import-not-found]

from laiai.auth.service import AuthService
from laiai.commons.depends import database_session
from laiai.core.settings import settings


@lru_cache
def get_auth_service() -> AuthService:
    return AuthService.create()


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, value = authorization.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


async def current_user_optional(
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
    token: str | None = Cookie(default=None, alias=settings.AUTH_COOKIE_NAME),
    authorization: str | None = Header(default=None),
):
    token = token or _bearer_token(authorization)
    if not token:
        return None
    return await svc.get_user_for_session_token(session, token=token)


async def current_user_required(
    user=Depends(current_user_optional),
):
    # 401 here rather than through BaseServiceException (which maps to 4xx but not 401).
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized"
        )
    return user
