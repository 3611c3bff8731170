"""Perfect Pic foundation application -- settings runtime and services."""

from perfectpic.foundation.application.admin_settings import (
    AdminSettingsService,
    mask_sensitive_settings,
    sort_settings_for_admin,
)
from perfectpic.foundation.application.contributions import (
    LIFESPAN_PRIORITY_OBSERVABILITY,
    LIFESPAN_PRIORITY_PERSISTENCE,
    LifespanContribution,
)
from perfectpic.foundation.application.settings_runtime import (
    DEFAULT_CACHE_MAX_ENTRIES,
    CacheEntry,
    SettingsRuntime,
)
from perfectpic.foundation.application.site_settings import (
    CaptchaPublicConfig,
    RateLimitPolicy,
    RateLimitScope,
    SiteInfoItem,
    SiteSettings,
)
from perfectpic.foundation.application.system_init import (
    InitializeSystemCommand,
    InitState,
    SystemInitService,
)

__all__ = [
    "DEFAULT_CACHE_MAX_ENTRIES",
    "LIFESPAN_PRIORITY_OBSERVABILITY",
    "LIFESPAN_PRIORITY_PERSISTENCE",
    "AdminSettingsService",
    "CacheEntry",
    "CaptchaPublicConfig",
    "InitState",
    "InitializeSystemCommand",
    "LifespanContribution",
    "RateLimitPolicy",
    "RateLimitScope",
    "SettingsRuntime",
    "SiteInfoItem",
    "SiteSettings",
    "SystemInitService",
    "mask_sensitive_settings",
    "sort_settings_for_admin",
]
