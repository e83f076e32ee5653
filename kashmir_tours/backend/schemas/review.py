"""
Review Schemas.

Pydantic schemas for review API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = Field(default=None, max_length=5000)


class ReviewResponse(BaseModel):
    id: str
    user_id: str
    tour_id: str
    rating: int
    comment: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
