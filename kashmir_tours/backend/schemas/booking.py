"""
Booking Schemas.

Pydantic schemas for booking API request/response validation.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from kashmir_tours.backend.models.booking import BookingStatus


class BookingCreate(BaseModel):
    """Schema for booking seats on a tour."""

    tour_id: str = Field(..., min_length=1)
    travel_date: date = Field(..., examples=["2026-06-15"])
    travelers: int = Field(..., ge=1, le=50)
    contact_name: str = Field(..., min_length=1, max_length=120)
    contact_phone: str = Field(..., min_length=5, max_length=32)
    special_requests: str | None = Field(default=None, max_length=2000)


class BookingCancel(BaseModel):
    reason: str | None = Field(default=None, max_length=500)


class BookingResponse(BaseModel):
    """Schema for a booking in API responses."""

    id: str
    reference: str
    user_id: str
    tour_id: str
    travel_date: date
    travelers: int
    total_price: Decimal
    status: BookingStatus
    contact_name: str
    contact_phone: str
    special_requests: str | None
    cancelled_at: datetime | None
    cancellation_reason: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
