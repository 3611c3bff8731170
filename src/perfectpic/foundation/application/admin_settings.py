"""Admin-facing settings operations.

List for the admin UI with a stable order and masked secrets, batch update
with masked-value elision, and SMTP test email. The mask sentinel goes out
on list for sensitive rows and is ignored on input for those same rows, so
a read -> edit -> write-everything-back round trip never clobbers a secret.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from perfectpic.foundation.domain.exceptions import DomainError, InternalError, ValidationError
from perfectpic.foundation.domain.setting import MASKED_SETTING_VALUE
from perfectpic.foundation.domain.setting_keys import SettingKey
from perfectpic.foundation.domain.validators import parse_int64, validate_email

if TYPE_CHECKING:
    from collections.abc import Sequence

    from perfectpic.foundation.application.settings_runtime import SettingsRuntime
    from perfectpic.foundation.domain.ports import MailerPort, SettingStorePort
    from perfectpic.foundation.domain.setting import Setting, SettingUpdate
    from perfectpic.foundation.domain.setting_defaults import DefaultSchema

logger = logging.getLogger(__name__)

FALLBACK_SITE_NAME = "Perfect Pic"


def admin_sort_key(
    schema: DefaultSchema,
    setting: Setting,
) -> tuple[int, int] | tuple[int, int, int, str, str]:
    """Composite sort key for the canonical admin display order.

    Registry keys come first, in registry order. Other rows follow, grouped
    by known categories (in first-seen registry order), then unknown
    categories by name, then by key.
    """
    ordinal = schema.ordinal(setting.key)
    if ordinal is not None:
        return (0, ordinal)
    category_ordinal = schema.category_ordinal(setting.category)
    if category_ordinal is not None:
        return (1, 0, category_ordinal, setting.category, setting.key)
    return (1, 1, 0, setting.category, setting.key)


def sort_settings_for_admin(schema: DefaultSchema, settings: Sequence[Setting]) -> list[Setting]:
    """Stable sort of ``settings`` into the canonical admin order."""
    return sorted(settings, key=lambda setting: admin_sort_key(schema, setting))


def mask_sensitive_settings(settings: Sequence[Setting]) -> list[Setting]:
    """Copy ``settings`` with every sensitive value replaced by the mask."""
    return [
        dataclasses.replace(setting, value=MASKED_SETTING_VALUE) if setting.sensitive else setting
        for setting in settings
    ]


def validate_setting_update(item: SettingUpdate) -> None:
    """Validate one admin update item.

    Raises:
        ValidationError: If the key is blank, or a typed key receives a
            value outside its domain.
    """
    if not item.key.strip():
        raise ValidationError("key", "Setting key must not be empty")

    if item.key == SettingKey.DEFAULT_STORAGE_QUOTA:
        quota = parse_int64(item.value)
        if quota is None or quota <= 0:
            raise ValidationError(
                item.key,
                "Default storage quota must be a positive integer (bytes)",
            )


class AdminSettingsService:
    """Serves the admin settings UI.

    Args:
        store: Persistent setting store.
        runtime: Settings runtime whose cache is cleared after writes.
        mailer: Outbound mailer used by the test email operation.
    """

    def __init__(
        self,
        store: SettingStorePort,
        runtime: SettingsRuntime,
        mailer: MailerPort,
    ) -> None:
        self._store = store
        self._runtime = runtime
        self._mailer = mailer

    def admin_list_settings(self) -> list[Setting]:
        """All persisted settings in canonical order, secrets masked.

        Raises:
            InternalError: If the store cannot be read.
        """
        try:
            settings = self._store.find_all()
        except DomainError as err:
            raise InternalError("Failed to load settings") from err
        ordered = sort_settings_for_admin(self._runtime.schema, settings)
        return mask_sensitive_settings(ordered)

    def admin_update_settings(self, items: Sequence[SettingUpdate]) -> int:
        """Validate and persist a batch of ``{key, value}`` updates.

        Every item is validated before anything is written. A value equal
        to the mask sentinel is skipped for sensitive rows and written
        verbatim for all others. Unknown keys create new rows.

        Args:
            items: Update items; each addresses a distinct key.

        Returns:
            Number of items submitted.

        Raises:
            ValidationError: If any item is invalid (nothing is written).
            InternalError: If the store write fails (nothing is written).
        """
        for item in items:
            validate_setting_update(item)

        try:
            self._store.update_settings(items, MASKED_SETTING_VALUE)
        except DomainError as err:
            raise InternalError("Failed to update settings") from err

        self._runtime.clear_cache()
        # Keys only: values may be secrets.
        logger.info(
            "settings_updated",
            extra={"keys": [item.key for item in items], "count": len(items)},
        )
        return len(items)

    def admin_send_test_email(self, to: str) -> None:
        """Send an SMTP test message to ``to``.

        Raises:
            ValidationError: If ``to`` is not a valid email address.
            InternalError: If delivery fails for any reason.
        """
        validate_email(to)

        site_name = self._runtime.get_string(SettingKey.SITE_NAME) or FALLBACK_SITE_NAME
        subject = f"{site_name} SMTP test email"
        sent_at = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
        body = (
            f"This is a test email from {site_name}.\n"
            "If you received it, your SMTP configuration works.\n"
            f"Sent at: {sent_at}\n"
        )

        try:
            self._mailer.send(to, subject, body)
        except Exception as err:
            logger.warning(
                "settings_test_email_failed",
                extra={"error_type": type(err).__name__},
            )
            raise InternalError("Failed to send test email") from err

        logger.info("settings_test_email_sent")
