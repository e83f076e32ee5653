"""
Tours API Endpoints.

Public tour catalogue, seat availability and admin management.
"""

from datetime import date
from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Depends, Query

from kashmir_tours.backend.core.dependencies import AdminUser, DbSession, RequestId
from kashmir_tours.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from kashmir_tours.backend.models.tour import Tour, TourDifficulty
from kashmir_tours.backend.repositories.tour import TourFilters
from kashmir_tours.backend.schemas.base import ApiResponse
from kashmir_tours.backend.schemas.tour import (
    AvailabilityResponse,
    TourCreate,
    TourListResponse,
    TourResponse,
    TourUpdate,
)
from kashmir_tours.backend.services.tour import TourService

router = APIRouter()


async def _with_rating(service: TourService, tour: Tour) -> TourResponse:
    average, count = await service.get_rating(tour.id)
    return TourResponse.model_validate(tour).model_copy(
        update={"rating_average": average, "review_count": count},
    )


@router.get(
    "",
    summary="List tours (paginated)",
    description="Bookable tours ordered by price, then title.",
)
async def list_tours(
    db: DbSession,
    request_id: RequestId,
    pagination: PaginationParams = Depends(get_pagination_params),
    destination: str | None = Query(default=None, description="Destination slug"),
    min_price: Decimal | None = Query(default=None, ge=0),
    max_price: Decimal | None = Query(default=None, ge=0),
    max_days: int | None = Query(default=None, ge=1),
    difficulty: TourDifficulty | None = Query(default=None),
    q: str | None = Query(default=None, min_length=1, max_length=100, description="Title contains"),
) -> dict[str, Any]:
    filters = TourFilters(
        destination_slug=destination,
        min_price=min_price,
        max_price=max_price,
        max_days=max_days,
        difficulty=difficulty,
        query=q,
    )
    tours, total = await TourService(db).list_tours(
        filters,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return create_paginated_response(
        items=tours,
        item_schema=TourListResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get(
    "/{slug}",
    response_model=ApiResponse[TourResponse],
    summary="Get a tour",
    description="Tour details with average rating and review count.",
)
async def get_tour(slug: str, db: DbSession) -> ApiResponse[TourResponse]:
    service = TourService(db)
    tour = await service.get_tour(slug)
    return ApiResponse(data=await _with_rating(service, tour))


@router.get(
    "/{slug}/availability",
    response_model=ApiResponse[AvailabilityResponse],
    summary="Seat availability",
)
async def get_availability(
    slug: str,
    db: DbSession,
    travel_date: date = Query(..., description="Travel date (YYYY-MM-DD)"),
) -> ApiResponse[AvailabilityResponse]:
    availability = await TourService(db).get_availability(slug, travel_date)
    return ApiResponse(data=availability)


@router.post(
    "",
    response_model=ApiResponse[TourResponse],
    status_code=201,
    summary="Create a tour",
    description="Admin only. The slug is derived from the title.",
)
async def create_tour(data: TourCreate, db: DbSession, admin: AdminUser) -> ApiResponse[TourResponse]:
    service = TourService(db)
    tour = await service.create_tour(data)
    return ApiResponse(data=await _with_rating(service, tour))


@router.patch(
    "/{tour_id}",
    response_model=ApiResponse[TourResponse],
    summary="Update a tour",
    description="Admin only. Only provided fields are updated.",
)
async def update_tour(
    tour_id: str,
    data: TourUpdate,
    db: DbSession,
    admin: AdminUser,
) -> ApiResponse[TourResponse]:
    service = TourService(db)
    tour = await service.update_tour(tour_id, data)
    return ApiResponse(data=await _with_rating(service, tour))


@router.delete(
    "/{tour_id}",
    response_model=ApiResponse[TourResponse],
    summary="Deactivate a tour",
    description="Admin only. Soft delete; existing bookings are kept.",
)
async def deactivate_tour(tour_id: str, db: DbSession, admin: AdminUser) -> ApiResponse[TourResponse]:
    service = TourService(db)
    tour = await service.deactivate_tour(tour_id)
    return ApiResponse(data=await _with_rating(service, tour))
