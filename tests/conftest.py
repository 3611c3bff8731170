"""Shared fixtures: in-memory fakes, SQLite-backed stores and app clients."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from perfectpic import bootstrap
from perfectpic.bootstrap import build_container
from perfectpic.foundation.application import SettingsRuntime
from perfectpic.infra import persistence
from perfectpic.infra.fastapi import AppSettings, create_app
from perfectpic.infra.persistence import (
    DatabaseManager,
    DatabaseSettings,
    SettingRepository,
    SystemRepository,
)

from .fakes import (
    InMemorySettingStore,
    InMemorySystemStore,
    PlainHasher,
    RecordingMailer,
    header_admin_guard,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from fastapi import FastAPI
    from sqlalchemy.orm import Session, sessionmaker

    from perfectpic.bootstrap import SettingsContainer


# ---------------------------------------------------------------------------
# In-memory services
# ---------------------------------------------------------------------------


@pytest.fixture()
def store() -> InMemorySettingStore:
    return InMemorySettingStore()


@pytest.fixture()
def system_store(store: InMemorySettingStore) -> InMemorySystemStore:
    return InMemorySystemStore(store)


@pytest.fixture()
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture()
def runtime(store: InMemorySettingStore) -> SettingsRuntime:
    return SettingsRuntime(store)


@pytest.fixture()
def container(
    store: InMemorySettingStore,
    system_store: InMemorySystemStore,
    mailer: RecordingMailer,
) -> SettingsContainer:
    return build_container(
        store,
        system_store,
        mailer=mailer,
        hasher=PlainHasher(),
        cache_max_entries=128,
    )


# ---------------------------------------------------------------------------
# SQLite-backed stores
# ---------------------------------------------------------------------------


@pytest.fixture()
def database_manager() -> Iterator[DatabaseManager]:
    """In-memory SQLite manager with tables created; disposed after the test."""
    manager = DatabaseManager(DatabaseSettings(url="sqlite://"))
    manager.create_tables()
    yield manager
    manager.dispose()


@pytest.fixture()
def session_factory(database_manager: DatabaseManager) -> sessionmaker[Session]:
    return database_manager.get_session_factory()


@pytest.fixture()
def setting_repository(session_factory: sessionmaker[Session]) -> SettingRepository:
    return SettingRepository(session_factory)


@pytest.fixture()
def system_repository(session_factory: sessionmaker[Session]) -> SystemRepository:
    return SystemRepository(session_factory)


@pytest.fixture()
def sql_container(
    setting_repository: SettingRepository,
    system_repository: SystemRepository,
    mailer: RecordingMailer,
) -> SettingsContainer:
    return build_container(
        setting_repository,
        system_repository,
        mailer=mailer,
        hasher=PlainHasher(),
        cache_max_entries=128,
    )


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


@pytest.fixture()
def app(container: SettingsContainer) -> FastAPI:
    """App over the in-memory container; only the settings hook runs."""
    return create_app(
        AppSettings(),
        container=container,
        admin_guard=header_admin_guard,
        lifespan_hooks=[bootstrap.lifespan_contribution],
    )


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture()
def sql_client(
    database_manager: DatabaseManager,
    sql_container: SettingsContainer,
) -> Iterator[TestClient]:
    """Client over SQLite stores with the persistence and settings hooks."""
    sql_app = create_app(
        AppSettings(),
        container=sql_container,
        database_manager=database_manager,
        admin_guard=header_admin_guard,
        lifespan_hooks=[persistence.lifespan_contribution, bootstrap.lifespan_contribution],
    )
    with TestClient(sql_app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture()
def admin_headers() -> dict[str, str]:
    return {"X-Test-Role": "admin"}
