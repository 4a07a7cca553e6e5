from __future__ import annotations

from laiai.core.settings import settings
from laiai.health import repository


async def get_health_payload() -> dict:
    db_ok, db_detail = await repository.check_db()
    completion_ok, completion_detail = repository.check_completion()

    # The chat cannot work without either of them; report which one is missing.
    if db_ok and completion_ok:
        status = "ok"
    elif db_ok or completion_ok:
        status = "degraded"
    else:
        status = "error"

    return {
        "status": status,
        "model": settings.GEMINI_MODEL,
        "db": {"ok": db_ok, "configured": True, "detail": db_detail},
        "completion": {
            "ok": completion_ok,
            "configured": completion_ok,
            "detail": completion_detail,
        },
    }
