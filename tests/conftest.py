"""
Global pytest fixtures.

Unit tests never touch a live DB or the completion service: dependencies are
overridden with fakes, and the credential is toggled per test.
"""

from collections.abc import Iterator
from datetime import datetime, timezone
from uuid import UUID

import pytest  # type: ignore[import-not-found]
from fastapi import FastAPI
from fastapi.testclient import TestClient

from laiai.api.main import build_app
from laiai.core.settings import settings

TEST_USER_ID = UUID("00000000-0000-0000-0000-000000000001")

_KEY_FIELDS = (
    "GEMINI_API_KEY",
    "NEXT_PUBLIC_GEMINI_API_KEY",
    "NEXT_PUBLIC_GOOGLE_API_KEY",
    "GOOGLE_API_KEY",
)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    """Session-scoped FastAPI app for tests."""
    return build_app()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    """Sync test client. Dependency overrides are reset after each test."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Default AnyIO backend for async tests."""
    return "asyncio"


@pytest.fixture()
def no_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _KEY_FIELDS:
        monkeypatch.setattr(settings, name, None)


@pytest.fixture()
def api_key(no_api_key: None, monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")
    return "test-key"


class FakeUser:
    id = TEST_USER_ID
    email = "lai@example.com"
    created_at = datetime(2026, 1, 1, tzinfo=timezone.utc)
    disabled_at = None


@pytest.fixture()
def fake_user() -> FakeUser:
    return FakeUser()
