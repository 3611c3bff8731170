"""FastAPI dependencies for the settings HTTP surface.

Services are read from ``request.app.state.container`` (built by the
settings lifespan hook or injected by the caller of ``create_app``).

Admin routes depend on :func:`require_admin`, which asks the
``request.app.state.admin_guard`` callable for the current principal.
Authentication itself is owned by the auth module; this layer only
enforces the admin role.
"""

# NOTE: Do NOT use ``from __future__ import annotations`` here.
# FastAPI dependency injection needs runtime-evaluable type annotations
# (``request: Request``) to resolve parameters.

from dataclasses import dataclass
from typing import Annotated, Protocol

from fastapi import Depends, Request

from perfectpic.bootstrap import SettingsContainer
from perfectpic.foundation.application import (
    AdminSettingsService,
    SiteSettings,
    SystemInitService,
)
from perfectpic.foundation.domain import AuthenticationError, AuthorizationError


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller as resolved by the auth module."""

    user_id: int
    username: str
    admin: bool = False


class AdminGuard(Protocol):
    """Resolves the authenticated principal of a request, or None."""

    def __call__(self, request: Request) -> Principal | None: ...


def get_container(request: Request) -> SettingsContainer:
    return request.app.state.container  # type: ignore[no-any-return]


def get_site_settings(
    container: Annotated[SettingsContainer, Depends(get_container)],
) -> SiteSettings:
    return container.site


def get_admin_service(
    container: Annotated[SettingsContainer, Depends(get_container)],
) -> AdminSettingsService:
    return container.admin


def get_init_service(
    container: Annotated[SettingsContainer, Depends(get_container)],
) -> SystemInitService:
    return container.init


def require_admin(request: Request) -> Principal:
    """Return the admin principal of the request.

    Raises:
        AuthenticationError: If no principal is present (-> 401), including
            when no guard is configured.
        AuthorizationError: If the principal is not an administrator (-> 403).
    """
    guard: AdminGuard | None = getattr(request.app.state, "admin_guard", None)
    principal = guard(request) if guard is not None else None
    if principal is None:
        raise AuthenticationError("Authentication required", auth_error="invalid_request")
    if not principal.admin:
        raise AuthorizationError(
            "Administrator role required",
            context={"user_id": principal.user_id},
        )
    return principal


SiteSettingsDep = Annotated[SiteSettings, Depends(get_site_settings)]
AdminServiceDep = Annotated[AdminSettingsService, Depends(get_admin_service)]
InitServiceDep = Annotated[SystemInitService, Depends(get_init_service)]
AdminPrincipal = Annotated[Principal, Depends(require_admin)]
