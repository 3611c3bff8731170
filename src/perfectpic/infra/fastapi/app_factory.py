"""FastAPI application factory.

Provides :func:`create_app`, which wires the request-id middleware, CORS,
RFC 7807 error handlers, the settings routers and the lifespan hooks
(logging, database, settings reconciliation).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from perfectpic import bootstrap
from perfectpic.infra import observability, persistence
from perfectpic.infra.fastapi.error_handlers import register_exception_handlers
from perfectpic.infra.fastapi.lifespan import compose_lifespan
from perfectpic.infra.fastapi.middleware.request_id import RequestIdMiddleware
from perfectpic.infra.fastapi.routers import admin_settings_router, public_settings_router
from perfectpic.infra.fastapi.settings import AppSettings

if TYPE_CHECKING:
    from fastapi import APIRouter

    from perfectpic.bootstrap import SettingsContainer
    from perfectpic.foundation.application import LifespanContribution
    from perfectpic.infra.fastapi.dependencies import AdminGuard
    from perfectpic.infra.persistence import DatabaseManager

logger = logging.getLogger(__name__)


def default_lifespan_hooks() -> list[LifespanContribution]:
    """Logging (50), database (75) and settings reconciliation (100)."""
    return [
        observability.lifespan_contribution,
        persistence.lifespan_contribution,
        bootstrap.lifespan_contribution,
    ]


def create_app(
    settings: AppSettings | None = None,
    *,
    container: SettingsContainer | None = None,
    database_manager: DatabaseManager | None = None,
    admin_guard: AdminGuard | None = None,
    lifespan_hooks: list[LifespanContribution] | None = None,
    extra_routers: list[APIRouter] | None = None,
) -> FastAPI:
    """Create the Perfect Pic settings API.

    Args:
        settings: Application settings. If ``None``, loaded from environment.
        container: Prebuilt services. If ``None``, the settings lifespan
            hook builds SQL-backed services on startup.
        database_manager: Database manager used by the persistence hook
            instead of the environment-configured default.
        admin_guard: Resolves the request principal for admin routes.
            Without one, every admin request is rejected with 401.
        lifespan_hooks: Replaces :func:`default_lifespan_hooks`.
        extra_routers: Additional routers (e.g. the auth module's).

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or AppSettings()
    hooks = default_lifespan_hooks() if lifespan_hooks is None else lifespan_hooks

    app = FastAPI(
        title=settings.title,
        version=settings.version,
        description=settings.description,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        debug=settings.debug,
        lifespan=compose_lifespan(hooks),
    )

    if container is not None:
        app.state.container = container
    if database_manager is not None:
        app.state.database_manager = database_manager
    app.state.admin_guard = admin_guard

    # Starlette middleware is LIFO: request-id ends up outermost.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allow_origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
        expose_headers=settings.cors.expose_headers,
    )
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)

    for router in [public_settings_router, admin_settings_router, *(extra_routers or [])]:
        app.include_router(router)
        logger.info("Included router: %r", router.prefix)

    return app
