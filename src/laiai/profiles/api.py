from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from laiai.auth.depends import current_user_required
from laiai.commons.depends import database_session
from laiai.profiles.schemas import ProfilePublic, UpsertProfileRequest
from laiai.profiles.service import ProfilesService, get_profiles_service

router = APIRouter(prefix="/api", tags=["profile"])


@router.get("/profile")
async def get_profile(
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[ProfilesService, Depends(get_profiles_service)],
    user=Depends(current_user_required),
) -> dict[str, Any]:
    # No row yet is not an error: the client gets an empty object.
    p = await svc.get_profile(session, user=user)
    return p.model_dump(mode="json") if p is not None else {}


@router.post("/profile", response_model=ProfilePublic)
async def upsert_profile(
    req: UpsertProfileRequest,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[ProfilesService, Depends(get_profiles_service)],
    user=Depends(current_user_required),
) -> ProfilePublic:
    return await svc.upsert_profile(session, user=user, req=req)
