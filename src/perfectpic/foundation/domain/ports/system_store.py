"""Port interface for the first-run initialization transaction."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from perfectpic.foundation.domain.user import NewUser


@runtime_checkable
class SystemStorePort(Protocol):
    """Port for the atomic bootstrap write and user counts."""

    def initialize_system(self, setting_values: Mapping[str, str], admin: NewUser) -> None:
        """Write setting values and create the administrator atomically.

        Setting values are upserted by key; metadata of existing rows is
        preserved. Either every write lands or none does.

        Args:
            setting_values: Key/value pairs to persist.
            admin: The administrator account to insert.

        Raises:
            ConflictError: If the username is already taken.
            InternalError: On any other store failure.
        """
        ...

    def count_users(self) -> int:
        """Total number of user accounts."""
        ...

    def count_admins(self) -> int:
        """Number of accounts holding the administrator role."""
        ...
