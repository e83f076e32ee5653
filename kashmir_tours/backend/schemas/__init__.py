# Pydantic schemas package
from kashmir_tours.backend.schemas.base import (
    ApiResponse,
    ErrorDetail,
    ErrorResponse,
    PaginatedResponse,
    PaginationInfo,
    ResponseMetadata,
)

__all__ = [
    "ApiResponse",
    "ErrorDetail",
    "ErrorResponse",
    "PaginatedResponse",
    "PaginationInfo",
    "ResponseMetadata",
]
