"""HTTP routers of the settings surface."""

from perfectpic.infra.fastapi.routers.admin_settings import router as admin_settings_router
from perfectpic.infra.fastapi.routers.public_settings import router as public_settings_router

__all__ = ["admin_settings_router", "public_settings_router"]
