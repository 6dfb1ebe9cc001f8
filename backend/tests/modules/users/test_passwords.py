"""Tests for modules/users/passwords.py."""

import pytest

from modules.users.exceptions import PasswordTooLongError
from modules.users.passwords import (
    MAX_PASSWORD_BYTES,
    hash_password,
    hash_password_async,
    verify_password,
    verify_dummy_password,
    verify_password_async,
)


class TestHashPassword:
    def test_hash_is_not_plaintext(self):
        """The stored value should be a bcrypt hash, never the password."""
        hashed = hash_password("correct horse", rounds=4)
        assert hashed != "correct horse"
        assert hashed.startswith("$2")

    def test_hash_is_salted(self):
        """Hashing the same password twice should give different hashes."""
        assert hash_password("correct horse", rounds=4) != hash_password("correct horse", rounds=4)

    def test_uses_configured_rounds(self):
        """Rounds should default to the BCRYPT_ROUNDS setting (4 in tests)."""
        hashed = hash_password("correct horse")
        assert hashed.split("$")[2] == "04"

    def test_rejects_passwords_over_limit(self):
        """Passwords longer than bcrypt's input limit should be refused."""
        with pytest.raises(PasswordTooLongError):
            hash_password("x" * (MAX_PASSWORD_BYTES + 1), rounds=4)

    def test_limit_counts_bytes_not_characters(self):
        """Multi-byte characters should count by their UTF-8 length."""
        with pytest.raises(PasswordTooLongError):
            hash_password("é" * 40, rounds=4)


class TestVerifyPassword:
    def test_matching_password(self):
        hashed = hash_password("correct horse", rounds=4)
        assert verify_password("correct horse", hashed) is True

    def test_wrong_password(self):
        hashed = hash_password("correct horse", rounds=4)
        assert verify_password("battery staple", hashed) is False

    def test_malformed_hash(self):
        """A corrupt stored hash should compare as a mismatch, not raise."""
        assert verify_password("correct horse", "not-a-bcrypt-hash") is False

    def test_overlong_candidate(self):
        hashed = hash_password("correct horse", rounds=4)
        assert verify_password("x" * 100, hashed) is False


class TestVerifyDummyPassword:
    def test_always_false(self):
        assert verify_dummy_password("turnstile-dummy-password") is False
        assert verify_dummy_password("anything") is False

    def test_overlong_candidate(self):
        assert verify_dummy_password("x" * 100) is False


class TestAsyncVariants:
    @pytest.mark.asyncio
    async def test_round_trip(self):
        """Async hashing and verification should agree with each other."""
        hashed = await hash_password_async("correct horse")
        assert await verify_password_async("correct horse", hashed) is True
        assert await verify_password_async("battery staple", hashed) is False
