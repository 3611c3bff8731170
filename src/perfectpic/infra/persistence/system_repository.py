"""SQLAlchemy-backed store for first-run initialization."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from perfectpic.foundation.domain.exceptions import ConflictError, InternalError
from perfectpic.infra.persistence.tables import settings_table, users_table

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from sqlalchemy.orm import Session

    from perfectpic.foundation.domain.user import NewUser

logger = logging.getLogger(__name__)


class SystemRepository:
    """Writes the bootstrap settings and the first administrator atomically.

    Args:
        session_factory: Callable returning a SQLAlchemy Session context manager.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def initialize_system(self, setting_values: Mapping[str, str], admin: NewUser) -> None:
        """Upsert ``setting_values`` and insert ``admin`` in one transaction.

        Existing setting rows keep their metadata; only the value changes.

        Raises:
            ConflictError: If ``admin.username`` is taken (nothing is applied).
            InternalError: On any other database failure (nothing is applied).
        """
        try:
            with self._session_factory() as session:
                for key, value in setting_values.items():
                    result = session.execute(
                        update(settings_table)
                        .where(settings_table.c.key == str(key))
                        .values(value=value)
                    )
                    if not result.rowcount:
                        session.execute(insert(settings_table).values(key=str(key), value=value))
                session.execute(
                    insert(users_table).values(
                        username=admin.username,
                        password=admin.password_hash,
                        admin=admin.admin,
                        avatar=admin.avatar,
                    )
                )
                session.commit()
        except IntegrityError as err:
            raise ConflictError("Username already exists", username=admin.username) from err
        except SQLAlchemyError as err:
            logger.exception("system_initialize_failed")
            raise InternalError("Failed to initialize system") from err

    def count_users(self) -> int:
        """Total number of user accounts."""
        return self._count(select(func.count()).select_from(users_table))

    def count_admins(self) -> int:
        """Number of administrator accounts."""
        return self._count(
            select(func.count()).select_from(users_table).where(users_table.c.admin.is_(True))
        )

    def _count(self, statement: object) -> int:
        try:
            with self._session_factory() as session:
                count = session.execute(statement).scalar_one()  # type: ignore[call-overload]
        except SQLAlchemyError as err:
            logger.exception("system_count_failed")
            raise InternalError("Failed to count users") from err
        return int(count)
