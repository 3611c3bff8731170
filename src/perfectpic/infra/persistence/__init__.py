"""Perfect Pic persistence -- SQLAlchemy stores, engine management, lifespan."""

from perfectpic.infra.persistence.database import (
    DatabaseManager,
    DatabaseSettings,
    get_database_manager,
    get_session_factory,
)
from perfectpic.infra.persistence.lifespan import lifespan_contribution
from perfectpic.infra.persistence.setting_repository import SettingRepository
from perfectpic.infra.persistence.store_settings import (
    SettingsStoreSettings,
    get_settings_store_settings,
)
from perfectpic.infra.persistence.system_repository import SystemRepository
from perfectpic.infra.persistence.tables import metadata, settings_table, users_table

__all__ = [
    "DatabaseManager",
    "DatabaseSettings",
    "SettingRepository",
    "SettingsStoreSettings",
    "SystemRepository",
    "get_database_manager",
    "get_session_factory",
    "get_settings_store_settings",
    "lifespan_contribution",
    "metadata",
    "settings_table",
    "users_table",
]
