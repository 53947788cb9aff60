# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for password hashing."""

import pytest

from src.domains.auth.password import DEFAULT_ROUNDS, PasswordHasher


class TestPasswordHasher:
    """Tests for PasswordHasher class."""

    def test_hash_returns_bcrypt_digest(self) -> None:
        """Test that hashing returns a bcrypt digest with the configured cost."""
        hasher = PasswordHasher(rounds=4)

        hashed = hasher.hash("test_password_123")

        assert hashed.startswith("$2b$04$")
        assert len(hashed) == 60

    def test_default_cost(self) -> None:
        """Test that the default cost factor is used without arguments."""
        assert PasswordHasher().rounds == DEFAULT_ROUNDS

    def test_hash_is_salted(self) -> None:
        """Test that hashing the same password twice gives different digests."""
        hasher = PasswordHasher(rounds=4)

        assert hasher.hash("same") != hasher.hash("same")

    def test_verify_correct_and_incorrect_password(self) -> None:
        """Test verification against the original and a wrong password."""
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("correct_password")

        assert hasher.verify("correct_password", hashed) is True
        assert hasher.verify("wrong_password", hashed) is False

    def test_verify_empty_inputs_return_false(self) -> None:
        """Test that an empty password or digest never verifies."""
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("valid_password")

        assert hasher.verify("", hashed) is False
        assert hasher.verify("password", "") is False
        assert hasher.verify("password", None) is False

    def test_verify_invalid_digest_returns_false(self) -> None:
        """Test that a malformed digest is rejected without raising."""
        hasher = PasswordHasher(rounds=4)

        assert hasher.verify("password", "not_a_valid_bcrypt_hash") is False

    def test_hash_empty_password_raises_error(self) -> None:
        """Test that hashing an empty password raises ValueError."""
        hasher = PasswordHasher(rounds=4)

        with pytest.raises(ValueError, match="Password cannot be empty"):
            hasher.hash("")
