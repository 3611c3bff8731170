"""Settings store configuration using Pydantic settings.

Environment Variables:
    SETTINGS_CACHE_MAX_ENTRIES: Upper bound on cached setting keys (default: 4096)
    SETTINGS_PRUNE_UNKNOWN_KEYS: Delete persisted rows whose key is not a
        known default during startup reconciliation (default: false)
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsStoreSettings(BaseSettings):
    """Configuration for the settings runtime and reconciliation."""

    model_config = SettingsConfigDict(
        env_prefix="SETTINGS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    cache_max_entries: int = Field(
        default=4096, ge=1, le=1_000_000, description="Maximum cached setting keys"
    )
    prune_unknown_keys: bool = Field(
        default=False,
        description="Delete rows with keys unknown to the default schema at startup",
    )


@lru_cache(maxsize=1)
def get_settings_store_settings() -> SettingsStoreSettings:
    """Get the cached settings store configuration."""
    return SettingsStoreSettings()
