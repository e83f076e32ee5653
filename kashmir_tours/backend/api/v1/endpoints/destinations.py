"""
Destinations API Endpoints.

Public destination catalogue and admin management.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from kashmir_tours.backend.core.dependencies import AdminUser, DbSession, RequestId
from kashmir_tours.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from kashmir_tours.backend.schemas.base import ApiResponse
from kashmir_tours.backend.schemas.destination import (
    DestinationCreate,
    DestinationResponse,
    DestinationUpdate,
)
from kashmir_tours.backend.services.destination import DestinationService

router = APIRouter()


@router.get(
    "",
    summary="List destinations (paginated)",
    description="Active destinations ordered by name, optionally filtered by name or region.",
)
async def list_destinations(
    db: DbSession,
    request_id: RequestId,
    pagination: PaginationParams = Depends(get_pagination_params),
    q: str | None = Query(default=None, min_length=1, max_length=100, description="Name contains"),
    region: str | None = Query(default=None, min_length=1, max_length=120),
) -> dict[str, Any]:
    destinations, total = await DestinationService(db).list_destinations(
        query=q,
        region=region,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return create_paginated_response(
        items=destinations,
        item_schema=DestinationResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get(
    "/{slug}",
    response_model=ApiResponse[DestinationResponse],
    summary="Get a destination",
)
async def get_destination(slug: str, db: DbSession) -> ApiResponse[DestinationResponse]:
    destination = await DestinationService(db).get_destination(slug)
    return ApiResponse(data=DestinationResponse.model_validate(destination))


@router.post(
    "",
    response_model=ApiResponse[DestinationResponse],
    status_code=201,
    summary="Create a destination",
    description="Admin only. The slug is derived from the name.",
)
async def create_destination(
    data: DestinationCreate,
    db: DbSession,
    admin: AdminUser,
) -> ApiResponse[DestinationResponse]:
    destination = await DestinationService(db).create_destination(data)
    return ApiResponse(data=DestinationResponse.model_validate(destination))


@router.patch(
    "/{destination_id}",
    response_model=ApiResponse[DestinationResponse],
    summary="Update a destination",
    description="Admin only. Only provided fields are updated; renaming changes the slug.",
)
async def update_destination(
    destination_id: str,
    data: DestinationUpdate,
    db: DbSession,
    admin: AdminUser,
) -> ApiResponse[DestinationResponse]:
    destination = await DestinationService(db).update_destination(destination_id, data)
    return ApiResponse(data=DestinationResponse.model_validate(destination))


@router.delete(
    "/{destination_id}",
    response_model=ApiResponse[DestinationResponse],
    summary="Deactivate a destination",
    description="Admin only. Soft delete; refused while the destination has active tours.",
)
async def deactivate_destination(
    destination_id: str,
    db: DbSession,
    admin: AdminUser,
) -> ApiResponse[DestinationResponse]:
    destination = await DestinationService(db).deactivate_destination(destination_id)
    return ApiResponse(data=DestinationResponse.model_validate(destination))
