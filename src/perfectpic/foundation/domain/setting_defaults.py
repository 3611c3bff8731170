"""Default schema registry for dynamic settings.

The registry is an immutable, ordered sequence of known setting
definitions. It serves three purposes:

1. Seed data: a known key with no persisted row is lazily inserted with
   its default value on first read.
2. Reconciliation: at startup, missing defaults are inserted and the
   metadata of existing rows is refreshed (stored values are preserved).
3. Ordering: a definition's position (ordinal) and the first-seen
   position of its category define the canonical admin display order.

The set of defaults is closed and versioned with the code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from perfectpic.foundation.domain.setting import Setting
from perfectpic.foundation.domain.setting_keys import SettingKey

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

DEFAULT_STORAGE_QUOTA_BYTES = 1_073_741_824


@dataclass(frozen=True, slots=True)
class DefaultSetting:
    """A compiled-in setting definition.

    Attributes:
        key: Setting key.
        value: Default value inserted when no row exists.
        category: Grouping label (drives admin ordering).
        description: Help text shown to administrators.
        sensitive: Whether the value is masked on admin list.
    """

    key: str
    value: str
    category: str
    description: str
    sensitive: bool = False

    def to_setting(self) -> Setting:
        """Build the row inserted when this default is materialized."""
        return Setting(
            key=str(self.key),
            value=self.value,
            category=self.category,
            description=self.description,
            sensitive=self.sensitive,
        )


class DefaultSchema:
    """Ordered, immutable registry of default settings.

    Precomputes ``key -> ordinal`` and ``category -> first-seen ordinal``
    indexes at construction.

    Args:
        defaults: Definitions in canonical display order.

    Raises:
        ValueError: If two definitions share a key.
    """

    def __init__(self, defaults: Iterable[DefaultSetting]) -> None:
        self._defaults: tuple[DefaultSetting, ...] = tuple(defaults)
        self._order_by_key: dict[str, int] = {}
        self._category_order: dict[str, int] = {}
        for index, definition in enumerate(self._defaults):
            if definition.key in self._order_by_key:
                msg = f"Duplicate default setting key: {definition.key!r}"
                raise ValueError(msg)
            self._order_by_key[definition.key] = index
            if definition.category not in self._category_order:
                self._category_order[definition.category] = len(self._category_order)

    def __iter__(self) -> Iterator[DefaultSetting]:
        return iter(self._defaults)

    def __len__(self) -> int:
        return len(self._defaults)

    def __contains__(self, key: object) -> bool:
        return key in self._order_by_key

    def get(self, key: str) -> DefaultSetting | None:
        """Return the definition for ``key``, or None when unknown."""
        index = self._order_by_key.get(key)
        if index is None:
            return None
        return self._defaults[index]

    def ordinal(self, key: str) -> int | None:
        """Position of ``key`` in the registry, or None when unknown."""
        return self._order_by_key.get(key)

    def category_ordinal(self, category: str) -> int | None:
        """First-seen position of ``category``, or None when unknown."""
        return self._category_order.get(category)

    def keys(self) -> list[str]:
        """All registry keys in ordinal order."""
        return [str(definition.key) for definition in self._defaults]


DEFAULT_SETTINGS: tuple[DefaultSetting, ...] = (
    # general
    DefaultSetting(SettingKey.SITE_NAME, "Perfect Pic", "general", "Site name"),
    DefaultSetting(
        SettingKey.SITE_DESCRIPTION, "A simple picture bed", "general", "Site description"
    ),
    DefaultSetting(SettingKey.SITE_LOGO, "", "general", "Site logo URL"),
    DefaultSetting(SettingKey.SITE_FAVICON, "", "general", "Site favicon URL"),
    DefaultSetting(
        SettingKey.BASE_URL,
        "http://localhost",
        "general",
        "Public base URL used when generating links",
    ),
    # security
    DefaultSetting(
        SettingKey.ALLOW_INIT, "true", "security", "Allow first-run administrator setup"
    ),
    DefaultSetting(SettingKey.ALLOW_REGISTER, "true", "security", "Open user registration"),
    DefaultSetting(
        SettingKey.BLOCK_UNVERIFIED_USERS,
        "false",
        "security",
        "Block login for users with an unverified email",
    ),
    DefaultSetting(
        SettingKey.REQUIRE_EMAIL_VERIFICATION,
        "false",
        "security",
        "Require email verification on registration",
    ),
    DefaultSetting(
        SettingKey.TRUSTED_PROXIES,
        "",
        "security",
        "Trusted proxy list (comma separated; empty trusts no proxy headers; "
        "takes effect after restart)",
    ),
    # email
    DefaultSetting(SettingKey.ENABLE_SMTP, "false", "email", "Send email through SMTP"),
    # upload
    DefaultSetting(SettingKey.MAX_UPLOAD_SIZE, "10", "upload", "Maximum file size (MB)"),
    DefaultSetting(
        SettingKey.ALLOW_FILE_EXTENSIONS,
        ".jpg,.jpeg,.png,.gif,.webp",
        "upload",
        "Allowed upload file extensions",
    ),
    DefaultSetting(
        SettingKey.DEFAULT_STORAGE_QUOTA,
        str(DEFAULT_STORAGE_QUOTA_BYTES),
        "upload",
        "Default per-user storage quota (bytes, 1 GiB by default)",
    ),
    # rate limiting
    DefaultSetting(
        SettingKey.RATE_LIMIT_ENABLED, "true", "rate_limit", "Enable API rate limiting"
    ),
    DefaultSetting(
        SettingKey.RATE_LIMIT_AUTH_RPS, "0.5", "rate_limit", "Auth endpoints requests per second"
    ),
    DefaultSetting(
        SettingKey.RATE_LIMIT_AUTH_BURST, "2", "rate_limit", "Auth endpoints burst size"
    ),
    DefaultSetting(
        SettingKey.RATE_LIMIT_UPLOAD_RPS,
        "1.0",
        "rate_limit",
        "Upload endpoints requests per second",
    ),
    DefaultSetting(
        SettingKey.RATE_LIMIT_UPLOAD_BURST, "5", "rate_limit", "Upload endpoints burst size"
    ),
    DefaultSetting(
        SettingKey.ENABLE_SENSITIVE_RATE_LIMIT,
        "true",
        "rate_limit",
        "Throttle sensitive operations (password reset, email change)",
    ),
    DefaultSetting(
        SettingKey.PASSWORD_RESET_INTERVAL_SECONDS,
        "120",
        "rate_limit",
        "Minimum seconds between password reset requests",
    ),
    DefaultSetting(
        SettingKey.USERNAME_CHANGE_INTERVAL_SECONDS,
        "120",
        "rate_limit",
        "Minimum seconds between username changes",
    ),
    DefaultSetting(
        SettingKey.EMAIL_CHANGE_INTERVAL_SECONDS,
        "120",
        "rate_limit",
        "Minimum seconds between email changes",
    ),
    # service
    DefaultSetting(
        SettingKey.MAX_REQUEST_BODY_SIZE,
        "2",
        "service",
        "Maximum request body size for non-upload endpoints (MB)",
    ),
    DefaultSetting(
        SettingKey.STATIC_CACHE_CONTROL,
        "public, max-age=31536000",
        "service",
        "Cache-Control header for static assets",
    ),
    # captcha
    DefaultSetting(
        SettingKey.CAPTCHA_PROVIDER,
        "",
        "captcha",
        "Captcha provider (empty, image, turnstile, recaptcha, hcaptcha, geetest)",
    ),
    DefaultSetting(
        SettingKey.CAPTCHA_TURNSTILE_SITE_KEY, "", "captcha", "Cloudflare Turnstile site key"
    ),
    DefaultSetting(
        SettingKey.CAPTCHA_TURNSTILE_SECRET_KEY,
        "",
        "captcha",
        "Cloudflare Turnstile secret key",
        sensitive=True,
    ),
    DefaultSetting(
        SettingKey.CAPTCHA_RECAPTCHA_SITE_KEY, "", "captcha", "Google reCAPTCHA site key"
    ),
    DefaultSetting(
        SettingKey.CAPTCHA_RECAPTCHA_SECRET_KEY,
        "",
        "captcha",
        "Google reCAPTCHA secret key",
        sensitive=True,
    ),
    DefaultSetting(SettingKey.CAPTCHA_HCAPTCHA_SITE_KEY, "", "captcha", "hCaptcha site key"),
    DefaultSetting(
        SettingKey.CAPTCHA_HCAPTCHA_SECRET_KEY,
        "",
        "captcha",
        "hCaptcha secret key",
        sensitive=True,
    ),
    DefaultSetting(SettingKey.CAPTCHA_GEETEST_CAPTCHA_ID, "", "captcha", "GeeTest captcha ID"),
    DefaultSetting(
        SettingKey.CAPTCHA_GEETEST_CAPTCHA_KEY,
        "",
        "captcha",
        "GeeTest captcha key",
        sensitive=True,
    ),
)

DEFAULT_SCHEMA = DefaultSchema(DEFAULT_SETTINGS)
"""Process-wide default schema. Shared and read-only."""
