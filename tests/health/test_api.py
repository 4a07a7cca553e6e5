from laiai.health import repository


def _db(ok: bool, detail: str | None = None):  # type: ignore[no-untyped-def]
    async def check_db():  # type: ignore[no-untyped-def]
        return ok, detail

    return check_db


def test_health_ok(client, api_key, monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setattr(repository, "check_db", _db(True))

    r = client.get("/health")

    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["db"]["ok"] is True
    assert data["completion"] == {"ok": True, "configured": True, "detail": None}
    assert "model" in data


def test_health_degraded_without_key(client, no_api_key, monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setattr(repository, "check_db", _db(True))

    data = client.get("/health").json()

    assert data["status"] == "degraded"
    assert data["completion"]["configured"] is False
    assert data["completion"]["detail"] == "not_configured"


def test_health_error_when_nothing_works(client, no_api_key, monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setattr(repository, "check_db", _db(False, "connection refused"))

    r = client.get("/health")

    assert r.status_code == 503
    data = r.json()
    assert data["status"] == "error"
    assert data["db"] == {"ok": False, "configured": True, "detail": "connection refused"}
