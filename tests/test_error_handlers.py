"""Unit tests for perfectpic.infra.fastapi.error_handlers."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from unittest.mock import MagicMock
from uuid import UUID

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from perfectpic.foundation.domain import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from perfectpic.infra.fastapi.error_handlers import (
    PROBLEM_MEDIA_TYPE,
    ProblemDetail,
    _sanitize_context,
    _sanitize_value,
    register_exception_handlers,
    unhandled_exception_handler,
)
from perfectpic.infra.fastapi.middleware.request_id import RequestIdMiddleware


def _make_app(exc: Exception) -> FastAPI:
    """Create a minimal app whose ``/boom`` route raises ``exc``."""
    app = FastAPI()
    app.add_middleware(RequestIdMiddleware)
    register_exception_handlers(app)

    @app.get("/boom")
    def boom() -> None:
        raise exc

    return app


def _get(exc: Exception):  # type: ignore[no-untyped-def]
    client = TestClient(_make_app(exc), raise_server_exceptions=False)
    return client.get("/boom")


class TestProblemDetail:
    @pytest.mark.unit
    def test_optional_fields_default_none(self) -> None:
        problem = ProblemDetail(type="/errors/test", title="Test", status=400, detail="d")
        assert problem.instance is None
        assert problem.error_code is None
        assert problem.context is None
        assert problem.correlation_id is None

    @pytest.mark.unit
    def test_status_bounds(self) -> None:
        with pytest.raises(ValueError):
            ProblemDetail(type="/errors/test", title="Test", status=200, detail="d")


class TestKindToStatus:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("exc", "status", "type_uri", "error_code"),
        [
            (ValidationError("key", "bad"), 422, "/errors/validation-error", "VALIDATION_ERROR"),
            (ForbiddenError("System is already initialized"), 403, "/errors/forbidden", "FORBIDDEN"),
            (AuthorizationError("nope"), 403, "/errors/forbidden", "AUTHORIZATION_ERROR"),
            (ConflictError("Setting already exists"), 409, "/errors/conflict", "CONFLICT"),
            (NotFoundError("Setting", "k"), 404, "/errors/not-found", "RESOURCE_NOT_FOUND"),
            (InternalError("Failed"), 500, "/errors/internal-error", "INTERNAL_ERROR"),
            (DomainError("generic"), 500, "/errors/internal-error", "DOMAIN_ERROR"),
        ],
    )
    def test_maps_kind(
        self, exc: DomainError, status: int, type_uri: str, error_code: str
    ) -> None:
        resp = _get(exc)
        assert resp.status_code == status
        assert resp.headers["content-type"].startswith(PROBLEM_MEDIA_TYPE)
        body = resp.json()
        assert body["status"] == status
        assert body["type"] == type_uri
        assert body["error_code"] == error_code
        assert body["instance"] == "/boom"


class TestDomainErrorBody:
    @pytest.mark.unit
    def test_client_error_carries_sanitized_context(self) -> None:
        resp = _get(ValidationError("default_storage_quota", "must be positive", value="-1"))
        body = resp.json()
        assert body["detail"].startswith("Validation failed for 'default_storage_quota'")
        assert body["context"] == {"field": "default_storage_quota", "reason": "must be positive"}
        assert "correlation_id" not in body

    @pytest.mark.unit
    def test_internal_error_hides_context_and_has_correlation_id(self) -> None:
        resp = _get(InternalError("Failed to read setting", context={"key": "site_name"}))
        body = resp.json()
        assert body["detail"] == "Failed to read setting"
        assert "context" not in body
        assert body["correlation_id"] == resp.headers["X-Request-ID"]


class TestAuthenticationErrorHandler:
    @pytest.mark.unit
    def test_401_with_www_authenticate(self) -> None:
        resp = _get(AuthenticationError("Authentication required", auth_error="invalid_request"))
        assert resp.status_code == 401
        assert resp.headers["WWW-Authenticate"] == 'Bearer realm="API", error="invalid_request"'
        assert resp.json()["type"] == "/errors/authentication-error"


class TestUnhandledException:
    @pytest.mark.unit
    def test_generic_500_hides_details(self) -> None:
        resp = _get(RuntimeError("postgresql://user:pw@db/x exploded"))
        assert resp.status_code == 500
        body = resp.json()
        assert body["error_code"] == "INTERNAL_ERROR"
        assert "exploded" not in body["detail"]
        assert "correlation_id" in body

    @pytest.mark.unit
    @pytest.mark.asyncio(loop_scope="function")
    async def test_debug_includes_exception_type(self) -> None:
        request = MagicMock()
        request.app.debug = True
        request.url.path = "/boom"
        request.method = "GET"

        resp = await unhandled_exception_handler(request, RuntimeError("boom"))

        body = json.loads(resp.body)
        assert body["detail"] == "RuntimeError: boom"
        assert body["context"] == {"exception_type": "RuntimeError"}


class TestRequestValidation:
    @pytest.mark.unit
    def test_body_errors_listed(self) -> None:
        app = FastAPI()
        register_exception_handlers(app)

        @app.post("/items")
        def create(item: dict[str, int]) -> dict[str, int]:
            return item

        resp = TestClient(app).post("/items", json={"a": "not-int"})
        assert resp.status_code == 422
        body = resp.json()
        assert body["error_code"] == "REQUEST_VALIDATION_ERROR"
        assert body["context"]["errors"][0]["loc"][0] == "body"


class TestSanitizeContext:
    @pytest.mark.unit
    def test_none_and_empty(self) -> None:
        assert _sanitize_context(None) is None
        assert _sanitize_context({"password": "x"}) is None

    @pytest.mark.unit
    def test_drops_secret_and_value_keys(self) -> None:
        sanitized = _sanitize_context(
            {"key": "captcha_turnstile_secret_key", "value": "s3cr3t", "Token": "t", "count": 2}
        )
        assert sanitized == {"key": "captcha_turnstile_secret_key", "count": 2}

    @pytest.mark.unit
    def test_redacts_connection_strings(self) -> None:
        assert _sanitize_value("postgresql+psycopg://u:p@host/db") == (
            "postgresql://[REDACTED]@[REDACTED]/db"
        )
        assert _sanitize_value("password=hunter2 ok") == "password=[REDACTED] ok"

    @pytest.mark.unit
    def test_converts_uuid_datetime_and_objects(self) -> None:
        moment = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
        uid = UUID("12345678-1234-5678-1234-567812345678")
        assert _sanitize_value(uid) == str(uid)
        assert _sanitize_value(moment) == moment.isoformat()
        assert _sanitize_value([uid, 1]) == [str(uid), 1]
        assert _sanitize_value(object()).startswith("<object object")
