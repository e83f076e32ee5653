"""
Unit Tests for Security Utilities.
"""

from datetime import timedelta

import pytest

from kashmir_tours.backend.core.exceptions import AuthenticationError
from kashmir_tours.backend.core.security import (
    ACCESS_TOKEN_TYPE,
    BCRYPT_MAX_BYTES,
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:
    """Tests for bcrypt hashing."""

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("dal-lake-2026")
        assert hashed != "dal-lake-2026"
        assert hashed.startswith("$2")

    def test_verify_correct_password(self):
        hashed = hash_password("dal-lake-2026")
        assert verify_password("dal-lake-2026", hashed) is True

    def test_verify_wrong_password(self):
        hashed = hash_password("dal-lake-2026")
        assert verify_password("wular-lake", hashed) is False

    def test_same_password_hashes_differently(self):
        assert hash_password("same-password") != hash_password("same-password")

    def test_verify_rejects_overlong_password(self):
        """Passwords bcrypt would truncate never verify."""
        base = "a" * BCRYPT_MAX_BYTES
        hashed = hash_password(base)
        assert verify_password(base + "extra", hashed) is False


class TestTokens:
    """Tests for JWT access and refresh tokens."""

    def test_access_token_round_trip(self):
        token = create_access_token({"sub": "user-1", "role": "customer"})
        payload = decode_token(token, expected_type=ACCESS_TOKEN_TYPE)

        assert payload["sub"] == "user-1"
        assert payload["role"] == "customer"
        assert payload["type"] == ACCESS_TOKEN_TYPE
        assert payload["aud"] == "kashmir-tours-api"

    def test_refresh_token_type(self):
        token = create_refresh_token({"sub": "user-1"})
        payload = decode_token(token, expected_type=REFRESH_TOKEN_TYPE)
        assert payload["type"] == REFRESH_TOKEN_TYPE

    def test_access_token_rejected_as_refresh(self):
        token = create_access_token({"sub": "user-1"})
        with pytest.raises(AuthenticationError):
            decode_token(token, expected_type=REFRESH_TOKEN_TYPE)

    def test_refresh_token_rejected_as_access(self):
        token = create_refresh_token({"sub": "user-1"})
        with pytest.raises(AuthenticationError):
            decode_token(token, expected_type=ACCESS_TOKEN_TYPE)

    def test_expired_token_rejected(self):
        token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(seconds=-10))
        with pytest.raises(AuthenticationError, match="Invalid or expired token"):
            decode_token(token)

    def test_garbage_token_rejected(self):
        with pytest.raises(AuthenticationError):
            decode_token("not-a-jwt")

    def test_token_signed_with_other_secret_rejected(self):
        from jose import jwt

        forged = jwt.encode(
            {"sub": "user-1", "type": ACCESS_TOKEN_TYPE, "aud": "kashmir-tours-api"},
            "some-other-secret-that-is-long-enough-000",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            decode_token(forged)
