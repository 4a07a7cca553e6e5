from fastapi import FastAPI
from fastapi.testclient import TestClient

from laiai.api.exceptions import configure_global_exception_handlers
from laiai.conversations.exceptions import (
    ConversationNotFoundException,
    ConversationsServiceException,
)
from laiai.core.db import DatabaseException
from laiai.commons.exceptions import BaseServiceUnProcessableException


def _app_raising(exc: Exception) -> TestClient:
    app = FastAPI()
    configure_global_exception_handlers(app)

    @app.get("/boom")
    def boom() -> None:
        raise exc

    return TestClient(app, raise_server_exceptions=False)


def test_feature_exception_maps_to_400_with_envelope() -> None:
    r = _app_raising(ConversationsServiceException("Failed to create conversation")).get("/boom")
    assert r.status_code == 400
    body = r.json()["exception"]
    assert body["message"] == "Failed to create conversation"
    assert body["path"] == "/boom"
    assert body["method"] == "GET"


def test_not_found_maps_to_404() -> None:
    r = _app_raising(ConversationNotFoundException("Conversation not found")).get("/boom")
    assert r.status_code == 404


def test_unprocessable_maps_to_422() -> None:
    r = _app_raising(BaseServiceUnProcessableException("bad")).get("/boom")
    assert r.status_code == 422


def test_database_failure_maps_to_503_without_details() -> None:
    r = _app_raising(DatabaseException("Database is not initialized", "dsn=secret")).get("/boom")
    assert r.status_code == 503
    body = r.json()["exception"]
    assert body["message"] == "Database is not initialized"
    assert body["details"] is None
