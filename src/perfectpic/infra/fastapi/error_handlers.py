"""RFC 7807 Problem Details exception handlers for FastAPI.

Translates the domain error taxonomy into ``application/problem+json``
responses. Each :class:`~perfectpic.foundation.domain.exceptions.DomainError`
carries a ``kind``; the kind alone selects the HTTP status:

    validation -> 422, unauthorized -> 401, forbidden -> 403,
    conflict -> 409, not_found -> 404, internal -> 500

Usage:
    from perfectpic.infra.fastapi.error_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from perfectpic.foundation.domain.exceptions import AuthenticationError, DomainError
from perfectpic.infra.fastapi.middleware.request_id import get_request_id

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"

# kind -> (status, type URI, title)
_PROBLEM_TYPES: dict[str, tuple[int, str, str]] = {
    "validation": (422, "/errors/validation-error", "Validation Error"),
    "unauthorized": (401, "/errors/unauthorized", "Unauthorized"),
    "forbidden": (403, "/errors/forbidden", "Forbidden"),
    "conflict": (409, "/errors/conflict", "Conflict"),
    "not_found": (404, "/errors/not-found", "Resource Not Found"),
    "internal": (500, "/errors/internal-error", "Internal Server Error"),
}


class ProblemDetail(BaseModel):
    """Body of every error response (``application/problem+json``).

    ``type``, ``title``, ``status``, ``detail`` and ``instance`` follow
    RFC 7807. ``error_code`` is the stable code clients branch on,
    ``context`` holds sanitized fields for 4xx responses and
    ``correlation_id`` echoes the request ID on 5xx responses.
    """

    type: str = Field(
        ...,
        description="Problem type path",
        examples=["/errors/validation-error", "/errors/forbidden"],
    )
    title: str = Field(..., description="Summary of the problem type", examples=["Forbidden"])
    status: int = Field(..., ge=400, le=599, description="HTTP status code")
    detail: str = Field(
        ...,
        description="What went wrong for this request",
        examples=["System is already initialized"],
    )
    instance: str | None = Field(default=None, description="Request path")
    error_code: str | None = Field(
        default=None,
        description="Stable error code",
        examples=["VALIDATION_ERROR", "FORBIDDEN"],
    )
    context: dict[str, Any] | None = Field(
        default=None,
        description="Sanitized error fields, e.g. the offending setting key",
    )
    correlation_id: str | None = Field(
        default=None,
        description="X-Request-ID of the failed request, for log lookup",
    )


_DSN_CREDENTIALS = re.compile(r"postgresql(\+\w+)?://[^@]*@[^/\s]*")
_SECRET_ASSIGNMENT = re.compile(
    r"\b(password|secret|token)\s*=\s*['\"]?[^'\"\s]+['\"]?", re.IGNORECASE
)

# Context keys never echoed to clients; "value" may be a sensitive setting.
_SENSITIVE_KEYS = frozenset(
    {"password", "password_hash", "secret", "token", "api_key", "apikey", "credential", "value"}
)


def _create_problem_response(problem: ProblemDetail) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(exclude_none=True),
        media_type=PROBLEM_MEDIA_TYPE,
    )


def _get_correlation_id() -> str:
    """Request ID set by RequestIdMiddleware, or "unknown" outside a request."""
    return get_request_id() or "unknown"


def _sanitize_context(context: dict[str, Any] | None) -> dict[str, Any] | None:
    """Make error context safe to return: drop secret-named keys, redact
    credentials embedded in strings, and coerce values to JSON types.

    Returns None when nothing is left.
    """
    if context is None:
        return None

    sanitized = {
        key: _sanitize_value(value)
        for key, value in context.items()
        if key.lower() not in _SENSITIVE_KEYS
    }
    return sanitized or None


def _sanitize_value(value: Any) -> Any:
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str):
        return _redact(value)
    if isinstance(value, dict):
        return _sanitize_context(value)
    if isinstance(value, (list, tuple)):
        return [_sanitize_value(item) for item in value]
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


def _redact(text: str) -> str:
    text = _DSN_CREDENTIALS.sub("postgresql://[REDACTED]@[REDACTED]", text)
    return _SECRET_ASSIGNMENT.sub(lambda m: f"{m.group(1).lower()}=[REDACTED]", text)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Translate any DomainError to problem details by its ``kind``.

    Internal errors keep their (safe) message but drop context, carry the
    correlation ID, and are logged with the chained cause.
    """
    status, type_uri, title = _PROBLEM_TYPES.get(exc.kind, _PROBLEM_TYPES["internal"])

    if status >= 500:
        correlation_id = _get_correlation_id()
        logger.error(
            "domain_internal_error",
            exc_info=exc,
            extra={
                "correlation_id": correlation_id,
                "path": str(request.url.path),
                "method": request.method,
                "error_code": exc.error_code,
            },
        )
        problem = ProblemDetail(
            type=type_uri,
            title=title,
            status=status,
            detail=exc.message,
            instance=str(request.url.path),
            error_code=exc.error_code,
            correlation_id=correlation_id,
        )
        return _create_problem_response(problem)

    problem = ProblemDetail(
        type=type_uri,
        title=title,
        status=status,
        detail=str(exc),
        instance=str(request.url.path),
        error_code=exc.error_code,
        context=_sanitize_context(exc.context),
    )
    return _create_problem_response(problem)


async def authentication_error_handler(
    request: Request,
    exc: AuthenticationError,
) -> JSONResponse:
    """Answer a missing or rejected principal with 401 and a Bearer challenge.

    RFC 6750 requires the WWW-Authenticate header on every Bearer 401;
    ``auth_error`` becomes its ``error`` parameter.
    """
    problem = ProblemDetail(
        type=f"/errors/{exc.error_code.lower().replace('_', '-')}",
        title="Unauthorized",
        status=401,
        detail=str(exc),
        instance=str(request.url.path),
        error_code=exc.error_code,
    )
    response = _create_problem_response(problem)
    response.headers["WWW-Authenticate"] = f'Bearer realm="API", error="{exc.auth_error}"'
    return response


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Translate FastAPI request body/query validation failures to 422."""
    errors = [
        {
            "loc": list(error.get("loc", [])),
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]

    problem = ProblemDetail(
        type="/errors/request-validation-error",
        title="Request Validation Error",
        status=422,
        detail="Request validation failed",
        instance=str(request.url.path),
        error_code="REQUEST_VALIDATION_ERROR",
        context={"errors": errors},
    )
    return _create_problem_response(problem)


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Catch-all handler for unhandled exceptions.

    Logs full exception details but returns only a correlation ID to the
    client. In debug mode the exception type and message are included.
    """
    correlation_id = _get_correlation_id()

    logger.error(
        "unhandled_exception",
        exc_info=exc,
        extra={
            "correlation_id": correlation_id,
            "path": str(request.url.path),
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
    )

    if getattr(request.app, "debug", False):
        detail = f"{type(exc).__name__}: {exc}"
        context: dict[str, Any] | None = {"exception_type": type(exc).__name__}
    else:
        detail = "An internal error occurred. Please contact support with the correlation ID."
        context = None

    problem = ProblemDetail(
        type="/errors/internal-error",
        title="Internal Server Error",
        status=500,
        detail=detail,
        instance=str(request.url.path),
        error_code="INTERNAL_ERROR",
        context=context,
        correlation_id=correlation_id,
    )
    return _create_problem_response(problem)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on a FastAPI application.

    Starlette resolves handlers along the exception's MRO, so the
    AuthenticationError handler wins over the DomainError fallback.

    Args:
        app: FastAPI application instance
    """
    # Starlette's handler typing is stricter than the runtime contract.
    app.add_exception_handler(
        AuthenticationError,
        authentication_error_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        DomainError,
        domain_error_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        RequestValidationError,
        request_validation_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)
