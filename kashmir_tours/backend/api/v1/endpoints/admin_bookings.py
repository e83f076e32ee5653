"""
Admin Bookings API Endpoints.

Booking oversight for administrators.
"""

from datetime import date
from typing import Any

from fastapi import APIRouter, Depends, Query

from kashmir_tours.backend.core.dependencies import AdminUser, DbSession, RequestId
from kashmir_tours.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from kashmir_tours.backend.models.booking import BookingStatus
from kashmir_tours.backend.schemas.base import ApiResponse
from kashmir_tours.backend.schemas.booking import BookingResponse
from kashmir_tours.backend.services.booking import BookingService

router = APIRouter()


@router.get(
    "",
    summary="All bookings (paginated)",
    description="Every booking, newest first, with optional filters.",
)
async def list_bookings(
    db: DbSession,
    admin: AdminUser,
    request_id: RequestId,
    pagination: PaginationParams = Depends(get_pagination_params),
    status: BookingStatus | None = Query(default=None),
    tour_id: str | None = Query(default=None),
    travel_date: date | None = Query(default=None),
) -> dict[str, Any]:
    bookings, total = await BookingService(db).list_all_bookings(
        status=status,
        tour_id=tour_id,
        travel_date=travel_date,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return create_paginated_response(
        items=bookings,
        item_schema=BookingResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.post(
    "/{reference}/confirm",
    response_model=ApiResponse[BookingResponse],
    summary="Confirm a booking",
)
async def confirm_booking(reference: str, db: DbSession, admin: AdminUser) -> ApiResponse[BookingResponse]:
    booking = await BookingService(db).confirm_booking(reference, admin)
    return ApiResponse(data=BookingResponse.model_validate(booking))


@router.post(
    "/{reference}/complete",
    response_model=ApiResponse[BookingResponse],
    summary="Complete a booking",
    description="Mark a confirmed booking as travelled once its date has been reached.",
)
async def complete_booking(reference: str, db: DbSession, admin: AdminUser) -> ApiResponse[BookingResponse]:
    booking = await BookingService(db).complete_booking(reference, admin)
    return ApiResponse(data=BookingResponse.model_validate(booking))
