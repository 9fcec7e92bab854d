"""Tests for error handling."""

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.src.middleware.error_handler import setup_error_handling, status_for
from backend.src.types import ErrorCode
from backend.src.utils.logging import LOGGER_NAME
from backend.src.utils.exceptions import (
    DigestMismatchError,
    MissingCanonicalNameError,
    StoreError,
    UnknownTermIdError
)


@pytest.fixture
def app():
    """Create FastAPI app raising application errors."""
    app = FastAPI()
    setup_error_handling(app)

    @app.get("/digest")
    async def digest():
        raise DigestMismatchError()

    @app.get("/missing")
    async def missing():
        raise MissingCanonicalNameError()

    @app.get("/unknown")
    async def unknown():
        raise UnknownTermIdError(5)

    @app.get("/store")
    async def store():
        raise StoreError("Query failed", details={"operation": "get_tree"})

    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.mark.parametrize("code,status", [
    (ErrorCode.VALIDATION_ERROR, 400),
    (ErrorCode.MISSING_CANONICAL_NAME, 400),
    (ErrorCode.AUTHENTICATION_ERROR, 401),
    (ErrorCode.DIGEST_MISMATCH, 401),
    (ErrorCode.UNKNOWN_TERM_ID, 404),
    (ErrorCode.STORE_ERROR, 500),
    (ErrorCode.INTERNAL_ERROR, 500),
])
def test_status_for(code, status):
    """Test error codes map to HTTP statuses."""
    assert status_for(code) == status


@pytest.mark.parametrize("path,status,code", [
    ("/digest", 401, "digest_mismatch"),
    ("/missing", 400, "missing_canonical_name"),
    ("/unknown", 404, "unknown_term_id"),
    ("/store", 500, "store_error"),
])
def test_error_responses(client, path, status, code):
    """Test application errors become JSON error bodies."""
    response = client.get(path)

    assert response.status_code == status
    body = response.json()
    assert body["code"] == code
    assert body["error"]
    assert "timestamp" in body


def test_error_details(client):
    """Test details are passed through."""
    body = client.get("/store").json()

    assert body["error"] == "Query failed"
    assert body["details"] == {"operation": "get_tree"}
    assert body["request_id"] is None


@pytest.mark.parametrize("path,level", [
    ("/missing", logging.WARNING),
    ("/unknown", logging.WARNING),
    ("/digest", logging.ERROR),
    ("/store", logging.ERROR),
])
def test_error_log_level_follows_severity(client, caplog, path, level):
    """Test errors are logged at the level of their severity."""
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        client.get(path)

    records = [record for record in caplog.records if record.name == LOGGER_NAME]
    assert [record.levelno for record in records] == [level]
