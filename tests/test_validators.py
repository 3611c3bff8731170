"""Unit tests for perfectpic.foundation.domain.validators."""

from __future__ import annotations

import pytest

from perfectpic.foundation.domain.exceptions import ValidationError
from perfectpic.foundation.domain.validators import (
    parse_int64,
    validate_email,
    validate_not_blank,
    validate_password,
    validate_username,
)


class TestValidateUsername:
    @pytest.mark.unit
    @pytest.mark.parametrize("username", ["alice", "bob_42", "A_b_C_d", "x" * 20])
    def test_accepts_valid(self, username: str) -> None:
        validate_username(username)

    @pytest.mark.unit
    @pytest.mark.parametrize("username", ["abc", "x" * 21, "bad-name", "with space", "名字名字"])
    def test_rejects_malformed(self, username: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_username(username)
        assert exc_info.value.field == "username"

    @pytest.mark.unit
    def test_rejects_purely_numeric(self) -> None:
        with pytest.raises(ValidationError, match="numeric"):
            validate_username("123456")

    @pytest.mark.unit
    def test_reserved_rejected_by_default(self) -> None:
        with pytest.raises(ValidationError, match="reserved"):
            validate_username("Admin")

    @pytest.mark.unit
    def test_reserved_allowed_when_requested(self) -> None:
        validate_username("admin", allow_reserved=True)


class TestValidatePassword:
    @pytest.mark.unit
    def test_accepts_letters_digits_symbols(self) -> None:
        validate_password("pw12345!")

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("password", "fragment"),
        [
            ("pw1234", "at least 8"),
            ("a1" * 37, "at most 72"),
            ("pässword1", "only contain"),
            ("pass word1", "only contain"),
            ("password", "one letter and one digit"),
            ("12345678", "one letter and one digit"),
        ],
    )
    def test_rejects_weak(self, password: str, fragment: str) -> None:
        with pytest.raises(ValidationError, match=fragment):
            validate_password(password)


class TestValidateEmail:
    @pytest.mark.unit
    def test_accepts_plain_address(self) -> None:
        validate_email("ops+smtp@example.co")

    @pytest.mark.unit
    @pytest.mark.parametrize("email", ["", "no-at-sign", "a@b", "a@b.c", "a b@example.com"])
    def test_rejects_invalid(self, email: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_email(email)
        assert exc_info.value.field == "email"


class TestValidateNotBlank:
    @pytest.mark.unit
    def test_rejects_whitespace(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_not_blank("site_name", "   ")
        assert exc_info.value.field == "site_name"

    @pytest.mark.unit
    def test_accepts_text(self) -> None:
        validate_not_blank("site_name", " Site ")


class TestParseInt64:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("42", 42),
            (" 7 ", 7),
            ("-1", -1),
            ("+5", 5),
            ("9223372036854775807", 2**63 - 1),
            ("-9223372036854775808", -(2**63)),
        ],
    )
    def test_parses(self, raw: str, expected: int) -> None:
        assert parse_int64(raw) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw",
        ["", "  ", "not-int", "1.5", "1_000", "9223372036854775808", "+", "٣"],
    )
    def test_rejects(self, raw: str) -> None:
        assert parse_int64(raw) is None
