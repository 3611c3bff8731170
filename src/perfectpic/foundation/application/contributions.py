"""Lifespan contribution type shared by infrastructure packages.

Each infrastructure package exposes a lifespan hook wrapped in a
:class:`LifespanContribution`; the FastAPI app factory composes them in
priority order. The type is framework-agnostic and lives here so that
persistence and observability do not import FastAPI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

LIFESPAN_PRIORITY_OBSERVABILITY = 50
LIFESPAN_PRIORITY_PERSISTENCE = 75


@dataclass(frozen=True, slots=True)
class LifespanContribution:
    """Describes a lifespan hook to be registered on the app.

    Attributes:
        hook: An async context manager factory ``(app) -> AsyncContextManager[None]``.
        priority: Ordering priority. Lower priorities start first (and shut down last).
    """

    hook: Any  # Callable[[Any], AsyncContextManager[None]]
    priority: int = 500
