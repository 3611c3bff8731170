"""Domain port interfaces for hexagonal architecture.

Ports define abstract interfaces that the domain and application layers
use to interact with persistence, hashing and mail. Implementations
(adapters) live in ``perfectpic.infra``.
"""

from perfectpic.foundation.domain.ports.mailer import MailerPort
from perfectpic.foundation.domain.ports.password_hasher import PasswordHasherPort
from perfectpic.foundation.domain.ports.setting_store import SettingStorePort
from perfectpic.foundation.domain.ports.system_store import SystemStorePort

__all__ = ["MailerPort", "PasswordHasherPort", "SettingStorePort", "SystemStorePort"]
