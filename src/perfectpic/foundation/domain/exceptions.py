"""Error taxonomy shared by the settings core and its adapters.

Every error raised by the settings core belongs to one of six kinds
(validation, unauthorized, forbidden, conflict, not_found, internal).
The HTTP layer maps each kind to a distinct status code; the core never
needs to know about HTTP.

Example:
    >>> from perfectpic.foundation.domain.exceptions import ValidationError
    >>> raise ValidationError("key", "Setting key must not be empty")
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "DomainError",
    "ForbiddenError",
    "InternalError",
    "NotFoundError",
    "ValidationError",
]


class DomainError(Exception):
    """Root of the settings error taxonomy.

    ``kind`` picks the HTTP status and ``error_code`` is the stable code
    clients branch on. ``context`` is logged, and it is returned only for
    4xx responses, after sanitizing.

    Example:
        >>> raise DomainError("Operation failed", context={"key": "site_name"})
        DomainError: Operation failed (key=site_name)
    """

    error_code: str = "DOMAIN_ERROR"
    kind: str = "internal"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Message followed by ``k=v`` context pairs."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class NotFoundError(DomainError):
    """Raised when a targeted entity does not exist.

    Maps to HTTP 404 Not Found.

    Example:
        >>> raise NotFoundError("Setting", "site_name")
        NotFoundError: Setting not found: site_name
    """

    error_code: str = "RESOURCE_NOT_FOUND"
    kind: str = "not_found"

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        **extra_context: Any,
    ) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type} not found: {resource_id}"
        context = {
            "resource_type": resource_type,
            "resource_id": str(resource_id),
            **extra_context,
        }
        super().__init__(message, context)


class ValidationError(DomainError):
    """Raised when caller-supplied input violates a documented constraint.

    Maps to HTTP 422 Unprocessable Entity.

    Attributes:
        field: Field path that failed validation.
        reason: Human-readable validation failure reason.

    Example:
        >>> raise ValidationError("default_storage_quota", "must be a positive integer")
        ValidationError: Validation failed for 'default_storage_quota': must be a positive integer
    """

    error_code: str = "VALIDATION_ERROR"
    kind: str = "validation"

    def __init__(
        self,
        field: str,
        reason: str,
        **extra_context: Any,
    ) -> None:
        self.field = field
        self.reason = reason
        message = f"Validation failed for '{field}': {reason}"
        context = {
            "field": field,
            "reason": reason,
            **extra_context,
        }
        super().__init__(message, context)


class ConflictError(DomainError):
    """Raised on a uniqueness violation at the store layer.

    Maps to HTTP 409 Conflict.

    Example:
        >>> raise ConflictError("Setting already exists", key="site_name")
        ConflictError: Conflict: Setting already exists (key=site_name)
    """

    error_code: str = "CONFLICT"
    kind: str = "conflict"

    def __init__(
        self,
        reason: str,
        **context: Any,
    ) -> None:
        self.reason = reason
        message = f"Conflict: {reason}"
        super().__init__(message, context)


class AuthenticationError(DomainError):
    """Raised when the caller is not authenticated.

    Maps to HTTP 401 Unauthorized. Raised by collaborators (the admin
    guard), never by the settings core itself.

    Attributes:
        auth_error: RFC 6750 error code for the WWW-Authenticate header.
    """

    error_code: str = "AUTHENTICATION_ERROR"
    kind: str = "unauthorized"

    def __init__(
        self,
        message: str,
        auth_error: str = "invalid_token",
        error_code: str = "AUTHENTICATION_ERROR",
        context: dict[str, Any] | None = None,
    ) -> None:
        self.auth_error = auth_error
        self.error_code = error_code
        super().__init__(message, context)


class ForbiddenError(DomainError):
    """Raised when the current state disallows the operation.

    Maps to HTTP 403 Forbidden. The canonical case is a second call to
    system initialization after the store has been flipped to ready.

    Example:
        >>> raise ForbiddenError("System is already initialized")
    """

    error_code: str = "FORBIDDEN"
    kind: str = "forbidden"


class AuthorizationError(ForbiddenError):
    """Raised when an authenticated principal lacks the admin role.

    Maps to HTTP 403 Forbidden.
    """

    error_code: str = "AUTHORIZATION_ERROR"


class InternalError(DomainError):
    """Raised on unexpected I/O or invariant failure.

    Maps to HTTP 500. The message is safe to show; the underlying cause
    is chained (``raise ... from err``) and only logged.
    """

    error_code: str = "INTERNAL_ERROR"
    kind: str = "internal"
