"""Composition root: wires stores, the settings runtime and services.

A single :class:`SettingsContainer` is built per process and threaded
through call sites (the FastAPI app keeps it on ``app.state.container``).
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from perfectpic.foundation.application import (
    AdminSettingsService,
    LifespanContribution,
    SettingsRuntime,
    SiteSettings,
    SystemInitService,
)
from perfectpic.infra.auth import BcryptPasswordHasher
from perfectpic.infra.mail import SmtpMailer, get_smtp_settings
from perfectpic.infra.persistence import (
    SettingRepository,
    SystemRepository,
    get_settings_store_settings,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from sqlalchemy.orm import Session

    from perfectpic.foundation.domain.ports import (
        MailerPort,
        PasswordHasherPort,
        SettingStorePort,
        SystemStorePort,
    )
    from perfectpic.infra.persistence import SettingsStoreSettings

logger = logging.getLogger(__name__)

LIFESPAN_PRIORITY_SETTINGS = 100


@dataclass(frozen=True, slots=True)
class SettingsContainer:
    """Process-wide settings services sharing one runtime (and one cache)."""

    setting_store: SettingStorePort
    system_store: SystemStorePort
    runtime: SettingsRuntime
    site: SiteSettings
    admin: AdminSettingsService
    init: SystemInitService


def build_container(
    setting_store: SettingStorePort,
    system_store: SystemStorePort,
    *,
    mailer: MailerPort,
    hasher: PasswordHasherPort,
    cache_max_entries: int,
) -> SettingsContainer:
    """Assemble the services around explicit store handles."""
    runtime = SettingsRuntime(setting_store, cache_max_entries=cache_max_entries)
    return SettingsContainer(
        setting_store=setting_store,
        system_store=system_store,
        runtime=runtime,
        site=SiteSettings(runtime),
        admin=AdminSettingsService(setting_store, runtime, mailer),
        init=SystemInitService(system_store, runtime, hasher),
    )


def build_sql_container(
    session_factory: Callable[[], Session],
    settings: SettingsStoreSettings | None = None,
) -> SettingsContainer:
    """Build the production container on SQL stores, bcrypt and SMTP."""
    settings = settings or get_settings_store_settings()
    return build_container(
        SettingRepository(session_factory),
        SystemRepository(session_factory),
        mailer=SmtpMailer(get_smtp_settings()),
        hasher=BcryptPasswordHasher(),
        cache_max_entries=settings.cache_max_entries,
    )


@asynccontextmanager
async def _settings_lifespan(app: Any) -> AsyncIterator[None]:
    """Build the container (unless provided) and reconcile the default schema.

    Runs after the persistence hook, which publishes
    ``app.state.database_manager``.
    """
    container: SettingsContainer | None = getattr(app.state, "container", None)
    if container is None:
        manager = app.state.database_manager
        container = build_sql_container(manager.get_session_factory())
        app.state.container = container

    prune = get_settings_store_settings().prune_unknown_keys
    removed = container.runtime.reconcile_defaults(prune=prune)
    logger.info(
        "settings_lifespan_ready",
        extra={"prune": prune, "pruned": removed},
    )
    yield


lifespan_contribution = LifespanContribution(
    hook=_settings_lifespan,
    priority=LIFESPAN_PRIORITY_SETTINGS,
)
