"""
User and Auth Schemas.

Pydantic schemas for registration, login and token exchange.
"""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kashmir_tours.backend.core.security import BCRYPT_MAX_BYTES, MIN_PASSWORD_LENGTH
from kashmir_tours.backend.models.user import UserRole

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not _EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email address")
    return value


class UserRegister(BaseModel):
    """Schema for creating a customer account."""

    email: str = Field(..., max_length=255, examples=["guest@example.com"])
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=BCRYPT_MAX_BYTES)
    full_name: str = Field(..., min_length=1, max_length=120, examples=["Aisha Mir"])
    phone: str | None = Field(default=None, max_length=32, examples=["+91 94190 00000"])

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, value: str) -> str:
        if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
        return value

    @field_validator("full_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Full name must not be blank")
        return value


class UserLogin(BaseModel):
    """Schema for password login."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=256)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Access/refresh token pair."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Access token lifetime in seconds")


class UserResponse(BaseModel):
    """Schema for a user in API responses."""

    id: str
    email: str
    full_name: str
    phone: str | None
    role: UserRole
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
