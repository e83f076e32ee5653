"""
Security Utilities.

Password hashing and JWT access/refresh tokens.
"""

from datetime import timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from kashmir_tours.backend.core.config import get_app_config, get_settings
from kashmir_tours.backend.core.exceptions import AuthenticationError
from kashmir_tours.backend.core.logging import get_logger
from kashmir_tours.backend.core.utils import utc_now

logger = get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72
MIN_PASSWORD_LENGTH = 8


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    password_bytes = plain_password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        return False
    return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))


def _encode(data: dict[str, Any], token_type: str, expires_delta: timedelta) -> str:
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    to_encode = data.copy()
    to_encode.update({
        "exp": utc_now() + expires_delta,
        "type": token_type,
        "aud": jwt_config.audience,
    })
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=jwt_config.algorithm)


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Payload data to encode (``sub`` is the user ID)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token
    """
    if expires_delta is None:
        jwt_config = get_app_config().security.jwt
        expires_delta = timedelta(minutes=jwt_config.access_token_expire_minutes)
    return _encode(data, ACCESS_TOKEN_TYPE, expires_delta)


def create_refresh_token(data: dict[str, Any]) -> str:
    """Create a JWT refresh token."""
    jwt_config = get_app_config().security.jwt
    return _encode(
        data,
        REFRESH_TOKEN_TYPE,
        timedelta(days=jwt_config.refresh_token_expire_days),
    )


def decode_token(token: str, expected_type: str | None = None) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Args:
        token: JWT token string
        expected_type: Reject tokens whose ``type`` claim differs

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If token is invalid, expired or of the wrong type
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired token") from e

    if expected_type is not None and payload.get("type") != expected_type:
        logger.warning(
            "Token type mismatch",
            extra={"expected": expected_type, "actual": payload.get("type")},
        )
        raise AuthenticationError("Invalid or expired token")

    return payload
