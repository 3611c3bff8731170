"""Known setting keys and captcha provider identifiers.

Collaborators (rate limiter, captcha, upload, registration) read these
keys through the typed accessors of the settings runtime.
"""

from __future__ import annotations

from enum import StrEnum


class SettingKey(StrEnum):
    """Registry of setting keys shipped with the default schema."""

    # general
    SITE_NAME = "site_name"
    SITE_DESCRIPTION = "site_description"
    SITE_LOGO = "site_logo"
    SITE_FAVICON = "site_favicon"
    BASE_URL = "base_url"

    # security
    ALLOW_INIT = "allow_init"
    ALLOW_REGISTER = "allow_register"
    BLOCK_UNVERIFIED_USERS = "block_unverified_users"
    REQUIRE_EMAIL_VERIFICATION = "require_email_verification"
    TRUSTED_PROXIES = "trusted_proxies"

    # email
    ENABLE_SMTP = "enable_smtp"

    # upload
    MAX_UPLOAD_SIZE = "max_upload_size"
    ALLOW_FILE_EXTENSIONS = "allow_file_extensions"
    DEFAULT_STORAGE_QUOTA = "default_storage_quota"

    # rate limiting
    RATE_LIMIT_ENABLED = "rate_limit_enabled"
    RATE_LIMIT_AUTH_RPS = "rate_limit_auth_rps"
    RATE_LIMIT_AUTH_BURST = "rate_limit_auth_burst"
    RATE_LIMIT_UPLOAD_RPS = "rate_limit_upload_rps"
    RATE_LIMIT_UPLOAD_BURST = "rate_limit_upload_burst"
    ENABLE_SENSITIVE_RATE_LIMIT = "enable_sensitive_rate_limit"
    PASSWORD_RESET_INTERVAL_SECONDS = "password_reset_interval_seconds"
    USERNAME_CHANGE_INTERVAL_SECONDS = "username_change_interval_seconds"
    EMAIL_CHANGE_INTERVAL_SECONDS = "email_change_interval_seconds"

    # service
    MAX_REQUEST_BODY_SIZE = "max_request_body_size"
    STATIC_CACHE_CONTROL = "static_cache_control"

    # captcha
    CAPTCHA_PROVIDER = "captcha_provider"
    CAPTCHA_TURNSTILE_SITE_KEY = "captcha_turnstile_site_key"
    CAPTCHA_TURNSTILE_SECRET_KEY = "captcha_turnstile_secret_key"
    CAPTCHA_RECAPTCHA_SITE_KEY = "captcha_recaptcha_site_key"
    CAPTCHA_RECAPTCHA_SECRET_KEY = "captcha_recaptcha_secret_key"
    CAPTCHA_HCAPTCHA_SITE_KEY = "captcha_hcaptcha_site_key"
    CAPTCHA_HCAPTCHA_SECRET_KEY = "captcha_hcaptcha_secret_key"
    CAPTCHA_GEETEST_CAPTCHA_ID = "captcha_geetest_captcha_id"
    CAPTCHA_GEETEST_CAPTCHA_KEY = "captcha_geetest_captcha_key"


class CaptchaProvider(StrEnum):
    """Captcha provider selector values. ``DISABLED`` is the empty string."""

    DISABLED = ""
    IMAGE = "image"
    TURNSTILE = "turnstile"
    RECAPTCHA = "recaptcha"
    HCAPTCHA = "hcaptcha"
    GEETEST = "geetest"
