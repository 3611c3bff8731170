"""SQLAlchemy-backed setting store.

Every method opens its own session; compound writes commit once at the
end so they are all-or-nothing. Driver errors are translated into the
domain taxonomy: a unique violation on insert becomes ``ConflictError``,
anything else becomes ``InternalError``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from perfectpic.foundation.domain.exceptions import ConflictError, InternalError
from perfectpic.foundation.domain.setting import Setting
from perfectpic.infra.persistence.tables import settings_table

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from sqlalchemy.engine import Row
    from sqlalchemy.orm import Session

    from perfectpic.foundation.domain.setting import SettingUpdate
    from perfectpic.foundation.domain.setting_defaults import DefaultSetting

logger = logging.getLogger(__name__)


def _row_to_setting(row: Row[Any]) -> Setting:
    return Setting(
        key=row.key,
        value=row.value,
        category=row.category,
        description=row.description,
        sensitive=bool(row.sensitive),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SettingRepository:
    """Read/write access to the ``settings`` table.

    Args:
        session_factory: Callable returning a SQLAlchemy Session context manager.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def find_by_key(self, key: str) -> Setting | None:
        """Read a single setting row.

        Args:
            key: Setting key.

        Returns:
            The setting, or None if no row exists.

        Raises:
            InternalError: On database failure.
        """
        try:
            with self._session_factory() as session:
                row = session.execute(
                    select(settings_table).where(settings_table.c.key == key)
                ).first()
        except SQLAlchemyError as err:
            logger.exception("setting_find_failed", extra={"key": key})
            raise InternalError("Failed to read setting", context={"key": key}) from err
        return _row_to_setting(row) if row is not None else None

    def find_all(self) -> list[Setting]:
        """Read every setting row.

        Raises:
            InternalError: On database failure.
        """
        try:
            with self._session_factory() as session:
                rows = session.execute(select(settings_table)).all()
        except SQLAlchemyError as err:
            logger.exception("setting_find_all_failed")
            raise InternalError("Failed to read settings") from err
        return [_row_to_setting(row) for row in rows]

    def create(self, setting: Setting) -> None:
        """Insert a new setting row.

        Args:
            setting: Row to insert. Timestamps are set by the database.

        Raises:
            ConflictError: If a row with the same key exists.
            InternalError: On any other database failure.
        """
        try:
            with self._session_factory() as session:
                session.execute(
                    insert(settings_table).values(
                        key=setting.key,
                        value=setting.value,
                        category=setting.category,
                        description=setting.description,
                        sensitive=setting.sensitive,
                    )
                )
                session.commit()
        except IntegrityError as err:
            raise ConflictError("Setting already exists", key=setting.key) from err
        except SQLAlchemyError as err:
            logger.exception("setting_create_failed", extra={"key": setting.key})
            raise InternalError("Failed to create setting", context={"key": setting.key}) from err

    def initialize_defaults(self, defaults: Iterable[DefaultSetting]) -> None:
        """Insert missing defaults and refresh metadata of existing rows.

        Existing values are never touched: only category, description and
        the sensitive flag are synchronized. Runs in one transaction.

        Raises:
            InternalError: On database failure (nothing is applied).
        """
        try:
            with self._session_factory() as session:
                existing = set(session.execute(select(settings_table.c.key)).scalars())
                inserted = 0
                for definition in defaults:
                    key = str(definition.key)
                    if key in existing:
                        session.execute(
                            update(settings_table)
                            .where(settings_table.c.key == key)
                            .values(
                                category=definition.category,
                                description=definition.description,
                                sensitive=definition.sensitive,
                            )
                        )
                    else:
                        session.execute(
                            insert(settings_table).values(
                                key=key,
                                value=definition.value,
                                category=definition.category,
                                description=definition.description,
                                sensitive=definition.sensitive,
                            )
                        )
                        existing.add(key)
                        inserted += 1
                session.commit()
        except SQLAlchemyError as err:
            logger.exception("setting_defaults_init_failed")
            raise InternalError("Failed to initialize default settings") from err
        logger.info("setting_defaults_initialized", extra={"inserted": inserted})

    def update_settings(self, items: Sequence[SettingUpdate], mask: str) -> None:
        """Upsert values by key in one transaction.

        An item whose value equals ``mask`` is skipped when the existing
        row is sensitive, preserving the stored secret. Rows that do not
        exist are created with empty metadata.

        Raises:
            InternalError: On database failure (nothing is applied).
        """
        try:
            with self._session_factory() as session:
                for item in items:
                    sensitive = session.execute(
                        select(settings_table.c.sensitive).where(settings_table.c.key == item.key)
                    ).scalar_one_or_none()
                    if sensitive is None:
                        session.execute(
                            insert(settings_table).values(key=item.key, value=item.value)
                        )
                    elif item.value == mask and sensitive:
                        continue
                    else:
                        session.execute(
                            update(settings_table)
                            .where(settings_table.c.key == item.key)
                            .values(value=item.value)
                        )
                session.commit()
        except SQLAlchemyError as err:
            logger.exception("setting_update_failed", extra={"count": len(items)})
            raise InternalError("Failed to update settings") from err

    def delete_not_in_keys(self, allowed_keys: Iterable[str]) -> int:
        """Delete rows whose key is not in ``allowed_keys``.

        Returns:
            Number of rows removed.

        Raises:
            InternalError: On database failure.
        """
        keys = [str(key) for key in allowed_keys]
        try:
            with self._session_factory() as session:
                result = session.execute(
                    delete(settings_table).where(settings_table.c.key.not_in(keys))
                )
                session.commit()
        except SQLAlchemyError as err:
            logger.exception("setting_prune_failed")
            raise InternalError("Failed to prune settings") from err
        row_count: int = getattr(result, "rowcount", 0)
        if row_count:
            logger.info("settings_pruned", extra={"removed": row_count})
        return row_count
