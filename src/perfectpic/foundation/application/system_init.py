"""First-run system initialization.

The store starts UNINITIALIZED (``allow_init`` is true). A single
successful :meth:`SystemInitService.initialize_system` writes the site
metadata, creates the first administrator and flips ``allow_init`` to
false, all in one transaction. There is no transition back.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from perfectpic.foundation.domain.exceptions import ForbiddenError
from perfectpic.foundation.domain.setting_keys import SettingKey
from perfectpic.foundation.domain.user import NewUser
from perfectpic.foundation.domain.validators import (
    validate_not_blank,
    validate_password,
    validate_username,
)

if TYPE_CHECKING:
    from perfectpic.foundation.application.settings_runtime import SettingsRuntime
    from perfectpic.foundation.domain.ports import PasswordHasherPort, SystemStorePort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InitializeSystemCommand:
    """Payload of the first-run setup form."""

    username: str
    password: str  # plaintext; hashed before it reaches the store
    site_name: str
    site_description: str

    def __repr__(self) -> str:
        return (
            f"InitializeSystemCommand(username={self.username!r}, password='***', "
            f"site_name={self.site_name!r}, site_description={self.site_description!r})"
        )


@dataclass(frozen=True, slots=True)
class InitState:
    """Public initialization status."""

    initialized: bool


class SystemInitService:
    """One-shot bootstrap guarded by a process-wide lock.

    The lock serializes concurrent callers in this process; the store's
    transaction and the unique username constraint reject any caller that
    reaches the write path from another process.

    Args:
        store: Store exposing the atomic initialization write.
        runtime: Settings runtime (reads ``allow_init``, cleared on success).
        hasher: Slow password hasher.
    """

    def __init__(
        self,
        store: SystemStorePort,
        runtime: SettingsRuntime,
        hasher: PasswordHasherPort,
    ) -> None:
        self._store = store
        self._runtime = runtime
        self._hasher = hasher
        self._lock = threading.Lock()

    def is_initialized(self) -> bool:
        return not self._runtime.get_bool(SettingKey.ALLOW_INIT)

    def get_init_state(self) -> InitState:
        return InitState(initialized=self.is_initialized())

    def initialize_system(self, cmd: InitializeSystemCommand) -> None:
        """Create the first administrator and mark the system initialized.

        Raises:
            ForbiddenError: If the system is already initialized.
            ValidationError: If the payload is invalid.
            ConflictError: If the username is already taken.
            InternalError: If the store write fails (nothing is written).
        """
        with self._lock:
            if self.is_initialized():
                raise ForbiddenError("System is already initialized")

            validate_username(cmd.username, allow_reserved=True)
            validate_password(cmd.password)
            validate_not_blank("site_name", cmd.site_name)
            validate_not_blank("site_description", cmd.site_description)

            admin = NewUser(
                username=cmd.username,
                password_hash=self._hasher.hash_password(cmd.password),
                admin=True,
            )
            self._store.initialize_system(
                {
                    SettingKey.SITE_NAME: cmd.site_name,
                    SettingKey.SITE_DESCRIPTION: cmd.site_description,
                    SettingKey.ALLOW_INIT: "false",
                },
                admin,
            )
            self._runtime.clear_cache()

        logger.info("system_initialized", extra={"username": cmd.username})
