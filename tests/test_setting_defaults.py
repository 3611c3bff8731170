"""Unit tests for the default schema registry."""

from __future__ import annotations

import pytest

from perfectpic.foundation.domain import (
    DEFAULT_SCHEMA,
    DEFAULT_STORAGE_QUOTA_BYTES,
    DefaultSchema,
    DefaultSetting,
    SettingKey,
)


class TestDefaultSchema:
    @pytest.mark.unit
    def test_every_setting_key_has_a_default(self) -> None:
        assert set(DEFAULT_SCHEMA.keys()) == {str(key) for key in SettingKey}

    @pytest.mark.unit
    def test_categories_in_first_seen_order(self) -> None:
        categories = ["general", "security", "email", "upload", "rate_limit", "service", "captcha"]
        assert [DEFAULT_SCHEMA.category_ordinal(c) for c in categories] == list(range(7))

    @pytest.mark.unit
    def test_ordinal_follows_declaration(self) -> None:
        assert DEFAULT_SCHEMA.ordinal("site_name") == 0
        assert DEFAULT_SCHEMA.ordinal("site_description") == 1
        assert DEFAULT_SCHEMA.ordinal("not_a_key") is None

    @pytest.mark.unit
    def test_get_known_and_unknown(self) -> None:
        definition = DEFAULT_SCHEMA.get("site_name")
        assert definition is not None
        assert definition.value == "Perfect Pic"
        assert definition.category == "general"
        assert DEFAULT_SCHEMA.get("legacy_custom_key") is None

    @pytest.mark.unit
    def test_contains_and_len(self) -> None:
        assert "allow_init" in DEFAULT_SCHEMA
        assert "legacy_custom_key" not in DEFAULT_SCHEMA
        assert len(DEFAULT_SCHEMA) == len(list(DEFAULT_SCHEMA))

    @pytest.mark.unit
    def test_only_captcha_secrets_are_sensitive(self) -> None:
        sensitive = {d.key for d in DEFAULT_SCHEMA if d.sensitive}
        assert sensitive == {
            SettingKey.CAPTCHA_TURNSTILE_SECRET_KEY,
            SettingKey.CAPTCHA_RECAPTCHA_SECRET_KEY,
            SettingKey.CAPTCHA_HCAPTCHA_SECRET_KEY,
            SettingKey.CAPTCHA_GEETEST_CAPTCHA_KEY,
        }

    @pytest.mark.unit
    def test_storage_quota_default_is_one_gib(self) -> None:
        definition = DEFAULT_SCHEMA.get(SettingKey.DEFAULT_STORAGE_QUOTA)
        assert definition is not None
        assert definition.value == str(DEFAULT_STORAGE_QUOTA_BYTES) == "1073741824"

    @pytest.mark.unit
    def test_rejects_duplicate_keys(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            DefaultSchema(
                [
                    DefaultSetting("a", "1", "x", ""),
                    DefaultSetting("a", "2", "y", ""),
                ]
            )

    @pytest.mark.unit
    def test_to_setting_copies_metadata(self) -> None:
        definition = DefaultSetting("k", "v", "cat", "desc", sensitive=True)
        setting = definition.to_setting()
        assert (setting.key, setting.value, setting.category) == ("k", "v", "cat")
        assert setting.description == "desc"
        assert setting.sensitive is True
