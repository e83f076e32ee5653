"""
Destination Schemas.

Pydantic schemas for destination API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from kashmir_tours.backend.schemas.base import require_sluggable


class DestinationCreate(BaseModel):
    """Schema for creating a destination."""

    name: str = Field(..., min_length=2, max_length=120, examples=["Gulmarg"])
    region: str = Field(..., min_length=2, max_length=120, examples=["Baramulla"])
    description: str | None = Field(default=None, max_length=5000)
    image_url: str | None = Field(default=None, max_length=500)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        return require_sluggable(value)


class DestinationUpdate(BaseModel):
    """Schema for updating a destination. Only provided fields change."""

    name: str | None = Field(default=None, min_length=2, max_length=120)
    region: str | None = Field(default=None, min_length=2, max_length=120)
    description: str | None = Field(default=None, max_length=5000)
    image_url: str | None = Field(default=None, max_length=500)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        return require_sluggable(value)

    @model_validator(mode="after")
    def reject_null_required(self) -> "DestinationUpdate":
        for field in ("name", "region"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class DestinationResponse(BaseModel):
    """Schema for a destination in API responses."""

    id: str
    name: str
    slug: str
    region: str
    description: str | None
    image_url: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
