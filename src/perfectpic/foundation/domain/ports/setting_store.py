"""Port interface for the persistent setting store.

The store exclusively owns persisted setting rows. The settings runtime
and the admin service reach persistence only through this protocol, so
tests can substitute an in-memory implementation.

Example:
    >>> from perfectpic.foundation.domain.ports import SettingStorePort
    >>> def count_rows(store: SettingStorePort) -> int:
    ...     return len(store.find_all())
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from perfectpic.foundation.domain.setting import Setting, SettingUpdate
    from perfectpic.foundation.domain.setting_defaults import DefaultSetting


@runtime_checkable
class SettingStorePort(Protocol):
    """Port for durable setting CRUD.

    I/O failures surface as ``InternalError``; a duplicate key on
    :meth:`create` surfaces as ``ConflictError``. Compound writes are
    all-or-nothing.
    """

    def find_by_key(self, key: str) -> Setting | None:
        """Return the row for ``key``, or None when it does not exist."""
        ...

    def find_all(self) -> list[Setting]:
        """Return every persisted row. Order is not significant."""
        ...

    def create(self, setting: Setting) -> None:
        """Insert a new row.

        Raises:
            ConflictError: If a row with the same key already exists.
        """
        ...

    def initialize_defaults(self, defaults: Iterable[DefaultSetting]) -> None:
        """Insert missing defaults and refresh metadata of existing rows.

        Stored values of existing rows are never altered.
        """
        ...

    def update_settings(self, items: Sequence[SettingUpdate], mask: str) -> None:
        """Upsert values by key in one transaction.

        An item whose value equals ``mask`` is skipped when the existing
        row is sensitive. New rows are created with empty metadata.
        """
        ...

    def delete_not_in_keys(self, allowed_keys: Iterable[str]) -> int:
        """Delete rows whose key is not in ``allowed_keys``.

        Returns:
            Number of rows removed.
        """
        ...
