"""Typed read-only views over the settings runtime for collaborators.

Rate limiting, captcha, upload quotas, registration and the public
web-info endpoint consume settings through these helpers rather than
parsing raw strings themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from perfectpic.foundation.domain.exceptions import ValidationError
from perfectpic.foundation.domain.setting_defaults import DEFAULT_STORAGE_QUOTA_BYTES
from perfectpic.foundation.domain.setting_keys import CaptchaProvider, SettingKey

if TYPE_CHECKING:
    from perfectpic.foundation.application.settings_runtime import SettingsRuntime

DEFAULT_SENSITIVE_OPERATION_INTERVAL_SECONDS = 120

SITE_INFO_KEYS: tuple[SettingKey, ...] = (
    SettingKey.SITE_NAME,
    SettingKey.SITE_DESCRIPTION,
    SettingKey.SITE_LOGO,
    SettingKey.SITE_FAVICON,
)

# provider -> (setting holding the public identifier, public config field name)
_CAPTCHA_PUBLIC_KEYS: dict[CaptchaProvider, tuple[SettingKey, str]] = {
    CaptchaProvider.TURNSTILE: (SettingKey.CAPTCHA_TURNSTILE_SITE_KEY, "turnstile_site_key"),
    CaptchaProvider.RECAPTCHA: (SettingKey.CAPTCHA_RECAPTCHA_SITE_KEY, "recaptcha_site_key"),
    CaptchaProvider.HCAPTCHA: (SettingKey.CAPTCHA_HCAPTCHA_SITE_KEY, "hcaptcha_site_key"),
    CaptchaProvider.GEETEST: (SettingKey.CAPTCHA_GEETEST_CAPTCHA_ID, "geetest_captcha_id"),
}


class RateLimitScope(StrEnum):
    """Endpoint groups with their own token-bucket parameters."""

    AUTH = "auth"
    UPLOAD = "upload"


_RATE_LIMIT_KEYS: dict[RateLimitScope, tuple[SettingKey, SettingKey]] = {
    RateLimitScope.AUTH: (SettingKey.RATE_LIMIT_AUTH_RPS, SettingKey.RATE_LIMIT_AUTH_BURST),
    RateLimitScope.UPLOAD: (
        SettingKey.RATE_LIMIT_UPLOAD_RPS,
        SettingKey.RATE_LIMIT_UPLOAD_BURST,
    ),
}

_SENSITIVE_INTERVAL_KEYS = frozenset(
    {
        SettingKey.PASSWORD_RESET_INTERVAL_SECONDS,
        SettingKey.USERNAME_CHANGE_INTERVAL_SECONDS,
        SettingKey.EMAIL_CHANGE_INTERVAL_SECONDS,
    }
)


@dataclass(frozen=True, slots=True)
class SiteInfoItem:
    """One public ``{key, value}`` pair of the web-info endpoint."""

    key: str
    value: str


@dataclass(frozen=True, slots=True)
class RateLimitPolicy:
    """Token-bucket parameters for one scope.

    Attributes:
        enabled: Global rate limiting switch.
        rps: Refill rate in requests per second.
        burst: Bucket capacity.
    """

    enabled: bool
    rps: float
    burst: int


@dataclass(frozen=True, slots=True)
class CaptchaPublicConfig:
    """Captcha provider plus the configuration a browser may see.

    Secret keys never appear in ``public_config``.
    """

    provider: CaptchaProvider
    public_config: dict[str, str] = field(default_factory=dict)


class SiteSettings:
    """Typed views for collaborators, backed by a :class:`SettingsRuntime`.

    Args:
        runtime: Shared settings runtime.
    """

    def __init__(self, runtime: SettingsRuntime) -> None:
        self._runtime = runtime

    def default_storage_quota(self) -> int:
        """Per-user storage quota in bytes; 1 GiB when unset or not positive."""
        quota = self._runtime.get_int64(SettingKey.DEFAULT_STORAGE_QUOTA)
        if quota <= 0:
            return DEFAULT_STORAGE_QUOTA_BYTES
        return quota

    def site_info(self) -> list[SiteInfoItem]:
        """Public site metadata in display order."""
        return [
            SiteInfoItem(key=str(key), value=self._runtime.get_string(key))
            for key in SITE_INFO_KEYS
        ]

    def rate_limit_policy(self, scope: RateLimitScope | str) -> RateLimitPolicy:
        """Token-bucket parameters for ``scope``.

        Raises:
            ValidationError: If ``scope`` is not a known scope.
        """
        try:
            resolved = RateLimitScope(scope)
        except ValueError as err:
            raise ValidationError("scope", f"Unknown rate limit scope: {scope}") from err
        rps_key, burst_key = _RATE_LIMIT_KEYS[resolved]
        return RateLimitPolicy(
            enabled=self._runtime.get_bool(SettingKey.RATE_LIMIT_ENABLED),
            rps=self._runtime.get_float(rps_key),
            burst=self._runtime.get_int(burst_key),
        )

    def sensitive_rate_limit_enabled(self) -> bool:
        return self._runtime.get_bool(SettingKey.ENABLE_SENSITIVE_RATE_LIMIT)

    def sensitive_operation_interval(self, key: SettingKey | str) -> int:
        """Minimum seconds between two sensitive operations.

        Args:
            key: One of the ``*_interval_seconds`` setting keys.

        Returns:
            Configured seconds, or 120 when the value is not positive.

        Raises:
            ValidationError: If ``key`` is not an interval setting.
        """
        if key not in _SENSITIVE_INTERVAL_KEYS:
            raise ValidationError("key", f"Not a sensitive operation interval: {key}")
        seconds = self._runtime.get_int(key)
        if seconds <= 0:
            return DEFAULT_SENSITIVE_OPERATION_INTERVAL_SECONDS
        return seconds

    def captcha_provider(self) -> CaptchaProvider:
        """Normalized captcha provider.

        The stored value is trimmed and lower-cased. An empty value
        disables captcha; an unrecognized value falls back to ``image``.
        """
        raw = self._runtime.get_string(SettingKey.CAPTCHA_PROVIDER).strip().lower()
        try:
            return CaptchaProvider(raw)
        except ValueError:
            return CaptchaProvider.IMAGE

    def captcha_public_config(self) -> CaptchaPublicConfig:
        """Provider plus its public site identifier, when configured."""
        provider = self.captcha_provider()
        public_key = _CAPTCHA_PUBLIC_KEYS.get(provider)
        if public_key is None:
            return CaptchaPublicConfig(provider=provider)
        setting_key, field_name = public_key
        site_key = self._runtime.get_string(setting_key).strip()
        if not site_key:
            return CaptchaPublicConfig(provider=provider)
        return CaptchaPublicConfig(provider=provider, public_config={field_name: site_key})

    def registration_allowed(self) -> bool:
        return self._runtime.get_bool(SettingKey.ALLOW_REGISTER)

    def is_initialized(self) -> bool:
        """True once first-run initialization has flipped ``allow_init`` off."""
        return not self._runtime.get_bool(SettingKey.ALLOW_INIT)
