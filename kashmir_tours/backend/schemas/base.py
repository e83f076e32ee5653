"""
Base Schemas.

Standard API response envelope shared by every endpoint.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from kashmir_tours.backend.core.utils import slugify, utc_now

DataT = TypeVar("DataT")


def require_sluggable(value: str | None) -> str | None:
    """Field validator body for names that URL slugs are derived from."""
    if value is not None:
        try:
            slugify(value)
        except ValueError:
            raise ValueError("Must contain at least one ASCII letter or digit") from None
    return value


class ResponseMetadata(BaseModel):
    """Metadata included in all API responses."""

    timestamp: datetime = Field(default_factory=utc_now)
    request_id: str | None = None


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict[str, Any] | None = None


class ApiResponse(BaseModel, Generic[DataT]):
    """
    Standard API response envelope.

    All API responses use this structure for consistency.
    """

    success: bool = True
    data: DataT | None = None
    error: ErrorDetail | None = None
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    """Standard error response."""

    success: bool = False
    data: None = None
    error: ErrorDetail
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)


class PaginationInfo(BaseModel):
    """Pagination metadata."""

    total: int | None = None
    limit: int
    offset: int = 0
    has_more: bool = False


class PaginatedResponse(BaseModel, Generic[DataT]):
    """Paginated response with offset-based navigation."""

    success: bool = True
    data: list[DataT]
    error: None = None
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)
    pagination: PaginationInfo
