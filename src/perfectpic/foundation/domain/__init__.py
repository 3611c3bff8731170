"""Perfect Pic foundation domain -- pure Python settings primitives.

Provides the error taxonomy, the setting entity, known setting keys, the
default schema registry, input validators and port interfaces.
"""

from perfectpic.foundation.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from perfectpic.foundation.domain.ports import (
    MailerPort,
    PasswordHasherPort,
    SettingStorePort,
    SystemStorePort,
)
from perfectpic.foundation.domain.setting import MASKED_SETTING_VALUE, Setting, SettingUpdate
from perfectpic.foundation.domain.setting_defaults import (
    DEFAULT_SCHEMA,
    DEFAULT_SETTINGS,
    DEFAULT_STORAGE_QUOTA_BYTES,
    DefaultSchema,
    DefaultSetting,
)
from perfectpic.foundation.domain.setting_keys import CaptchaProvider, SettingKey
from perfectpic.foundation.domain.user import NewUser

__all__ = [
    "DEFAULT_SCHEMA",
    "DEFAULT_SETTINGS",
    "DEFAULT_STORAGE_QUOTA_BYTES",
    "MASKED_SETTING_VALUE",
    "AuthenticationError",
    "AuthorizationError",
    "CaptchaProvider",
    "ConflictError",
    "DefaultSchema",
    "DefaultSetting",
    "DomainError",
    "ForbiddenError",
    "InternalError",
    "MailerPort",
    "NewUser",
    "NotFoundError",
    "PasswordHasherPort",
    "Setting",
    "SettingKey",
    "SettingStorePort",
    "SettingUpdate",
    "SystemStorePort",
    "ValidationError",
]
