"""
Tour Schemas.

Pydantic schemas for tour API request/response validation.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from kashmir_tours.backend.models.tour import TourDifficulty
from kashmir_tours.backend.schemas.base import require_sluggable


class TourCreate(BaseModel):
    """Schema for creating a tour."""

    destination_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=3, max_length=200, examples=["Gulmarg Gondola Day Trip"])
    summary: str = Field(..., min_length=1, max_length=500)
    description: str | None = Field(default=None, max_length=20000)
    duration_days: int = Field(..., ge=1, le=60)
    price_per_person: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    max_group_size: int = Field(..., ge=1, le=500)
    difficulty: TourDifficulty = TourDifficulty.EASY

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        return require_sluggable(value)


class TourUpdate(BaseModel):
    """Schema for updating a tour. Only provided fields change."""

    destination_id: str | None = Field(default=None, min_length=1)
    title: str | None = Field(default=None, min_length=3, max_length=200)
    summary: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = Field(default=None, max_length=20000)
    duration_days: int | None = Field(default=None, ge=1, le=60)
    price_per_person: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    max_group_size: int | None = Field(default=None, ge=1, le=500)
    difficulty: TourDifficulty | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        return require_sluggable(value)

    @model_validator(mode="after")
    def reject_null_required(self) -> "TourUpdate":
        """Only the description may be cleared with an explicit null."""
        for field in sorted(self.model_fields_set - {"description"}):
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class TourListResponse(BaseModel):
    """Schema for a tour in catalogue listings."""

    id: str
    destination_id: str
    title: str
    slug: str
    summary: str
    duration_days: int
    price_per_person: Decimal
    max_group_size: int
    difficulty: TourDifficulty

    model_config = ConfigDict(from_attributes=True)


class TourResponse(TourListResponse):
    """Schema for a single tour, with its rating summary."""

    description: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    rating_average: float | None = None
    review_count: int = 0


class AvailabilityResponse(BaseModel):
    """Seats on one travel date."""

    tour_id: str
    travel_date: date
    capacity: int
    booked: int
    remaining: int
