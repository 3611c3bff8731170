"""Unit tests for perfectpic.infra.auth.password_hasher."""

from __future__ import annotations

import pytest

from perfectpic.foundation.domain import PasswordHasherPort
from perfectpic.infra.auth import BcryptPasswordHasher


@pytest.fixture()
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


class TestBcryptPasswordHasher:
    @pytest.mark.unit
    def test_hash_is_salted_bcrypt(self, hasher: BcryptPasswordHasher) -> None:
        first = hasher.hash_password("pw12345!")
        second = hasher.hash_password("pw12345!")
        assert first.startswith("$2b$04$")
        assert first != second

    @pytest.mark.unit
    def test_verify(self, hasher: BcryptPasswordHasher) -> None:
        password_hash = hasher.hash_password("pw12345!")
        assert hasher.verify_password("pw12345!", password_hash) is True
        assert hasher.verify_password("pw12345?", password_hash) is False

    @pytest.mark.unit
    def test_malformed_hash_is_false(self, hasher: BcryptPasswordHasher) -> None:
        assert hasher.verify_password("pw12345!", "not-a-hash") is False

    @pytest.mark.unit
    def test_default_cost_factor(self) -> None:
        assert BcryptPasswordHasher()._rounds == 12

    @pytest.mark.unit
    def test_satisfies_port(self, hasher: BcryptPasswordHasher) -> None:
        assert isinstance(hasher, PasswordHasherPort)
