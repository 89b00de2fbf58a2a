"""Unit tests for security utilities (password hashing and JWT tokens)."""

from datetime import timedelta

import pytest
from jose import JWTError

from envelope_budget.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    get_subject_from_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:
    """Test password hashing functions."""

    def test_hash_password(self):
        """Test that password is hashed (not stored in plain text)."""
        password = "MySecurePassword123!"
        hashed = hash_password(password)

        assert hashed != password
        # Argon2 hashes start with $argon2
        assert hashed.startswith("$argon2")

    def test_verify_password_correct(self):
        hashed = hash_password("MySecurePassword123!")
        assert verify_password("MySecurePassword123!", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("MySecurePassword123!")
        assert verify_password("WrongPassword", hashed) is False


class TestJWTTokens:
    """Test JWT creation and subject extraction."""

    def test_access_token_round_trip(self):
        token = create_access_token("subject-123")

        payload = decode_token(token)
        assert payload["sub"] == "subject-123"
        assert payload["type"] == "access"
        assert get_subject_from_token(token) == "subject-123"

    def test_refresh_token_type(self):
        token = create_refresh_token("subject-123")

        assert decode_token(token)["type"] == "refresh"
        assert get_subject_from_token(token, expected_type="refresh") == "subject-123"

    def test_refresh_token_rejected_as_access(self):
        token = create_refresh_token("subject-123")

        with pytest.raises(JWTError):
            get_subject_from_token(token)

    def test_expired_token(self):
        token = create_access_token("subject-123", expires_delta=timedelta(seconds=-1))

        with pytest.raises(JWTError):
            decode_token(token)

    def test_tampered_token(self):
        token = create_access_token("subject-123")

        with pytest.raises(JWTError):
            decode_token(token[:-4] + "abcd")
