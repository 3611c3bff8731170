"""Perfect Pic FastAPI layer -- app factory, error handlers, routers."""

from perfectpic.infra.fastapi.app_factory import create_app, default_lifespan_hooks
from perfectpic.infra.fastapi.dependencies import AdminGuard, Principal, require_admin
from perfectpic.infra.fastapi.error_handlers import ProblemDetail, register_exception_handlers
from perfectpic.infra.fastapi.lifespan import compose_lifespan
from perfectpic.infra.fastapi.settings import AppSettings, CORSSettings

__all__ = [
    "AdminGuard",
    "AppSettings",
    "CORSSettings",
    "Principal",
    "ProblemDetail",
    "compose_lifespan",
    "create_app",
    "default_lifespan_hooks",
    "register_exception_handlers",
    "require_admin",
]
