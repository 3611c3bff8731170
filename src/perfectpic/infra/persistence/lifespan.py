"""Persistence lifespan hook for startup/shutdown resource management.

Handles:
- Table creation on startup (``CREATE TABLE IF NOT EXISTS`` semantics)
- Database health check on startup (SELECT 1)
- Engine disposal on shutdown

Priority 75 ensures persistence starts AFTER observability (50) but
BEFORE the settings services that read through it.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import text

from perfectpic.foundation.application import (
    LIFESPAN_PRIORITY_PERSISTENCE,
    LifespanContribution,
)
from perfectpic.infra.persistence.database import get_database_manager

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _persistence_lifespan(app: Any) -> AsyncIterator[None]:
    """Manage the database engine across the application lifecycle.

    The manager is published on ``app.state.database_manager`` so later
    hooks can build stores from its session factory. A manager already
    present on the app state (tests) is used instead of the default one.

    Args:
        app: The application instance.
    """
    manager = getattr(app.state, "database_manager", None) or get_database_manager()
    app.state.database_manager = manager

    manager.create_tables()
    with manager.get_engine().connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("persistence_lifespan: database ready")

    try:
        yield
    finally:
        manager.dispose()
        logger.info("persistence_lifespan: database engine disposed")


lifespan_contribution = LifespanContribution(
    hook=_persistence_lifespan,
    priority=LIFESPAN_PRIORITY_PERSISTENCE,
)
