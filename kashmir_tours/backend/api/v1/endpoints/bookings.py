"""
Bookings API Endpoints.

Customer-facing booking operations. Admin operations live in
admin_bookings.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from kashmir_tours.backend.core.dependencies import CurrentUser, DbSession, RequestId
from kashmir_tours.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from kashmir_tours.backend.models.booking import BookingStatus
from kashmir_tours.backend.schemas.base import ApiResponse
from kashmir_tours.backend.schemas.booking import BookingCancel, BookingCreate, BookingResponse
from kashmir_tours.backend.services.booking import BookingService

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[BookingResponse],
    status_code=201,
    summary="Book a tour",
    description="Reserve seats on a tour for one travel date. New bookings are pending.",
)
async def create_booking(
    data: BookingCreate,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[BookingResponse]:
    booking = await BookingService(db).create_booking(user, data)
    return ApiResponse(data=BookingResponse.model_validate(booking))


@router.get(
    "/me",
    summary="My bookings (paginated)",
    description="The caller's bookings, newest first.",
)
async def list_my_bookings(
    db: DbSession,
    user: CurrentUser,
    request_id: RequestId,
    pagination: PaginationParams = Depends(get_pagination_params),
    status: BookingStatus | None = Query(default=None),
) -> dict[str, Any]:
    bookings, total = await BookingService(db).list_user_bookings(
        user,
        status=status,
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


@router.get(
    "/{reference}",
    response_model=ApiResponse[BookingResponse],
    summary="Get a booking",
)
async def get_booking(reference: str, db: DbSession, user: CurrentUser) -> ApiResponse[BookingResponse]:
    booking = await BookingService(db).get_booking(reference, user)
    return ApiResponse(data=BookingResponse.model_validate(booking))


@router.post(
    "/{reference}/cancel",
    response_model=ApiResponse[BookingResponse],
    summary="Cancel a booking",
)
async def cancel_booking(
    reference: str,
    db: DbSession,
    user: CurrentUser,
    data: BookingCancel | None = None,
) -> ApiResponse[BookingResponse]:
    reason = data.reason if data else None
    booking = await BookingService(db).cancel_booking(reference, user, reason=reason)
    return ApiResponse(data=BookingResponse.model_validate(booking))
