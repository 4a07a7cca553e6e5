from __future__ import annotations

from fastapi import APIRouter, Depends  # type: ignore[import-not-found]

from laiai.auth.depends import current_user_required
from laiai.auth.schemas import MeResponse, UserPublic

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=MeResponse)
async def me(user=Depends(current_user_required)) -> MeResponse:
    return MeResponse(user=UserPublic.model_validate(user))
