from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class HealthCheck(BaseModel):
    ok: bool
    configured: bool = True
    detail: str | None = None


class HealthResponse(BaseModel):
    # ok: chat works. degraded: one dependency is down. error: nothing works.
    status: Literal["ok", "degraded", "error"]
    model: str
    db: HealthCheck
    completion: HealthCheck
