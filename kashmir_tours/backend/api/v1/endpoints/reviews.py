"""
Reviews API Endpoints.

Tour reviews by travellers who completed the tour.
"""

from typing import Any

from fastapi import APIRouter, Depends

from kashmir_tours.backend.core.dependencies import CurrentUser, DbSession, RequestId
from kashmir_tours.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from kashmir_tours.backend.schemas.base import ApiResponse
from kashmir_tours.backend.schemas.review import ReviewCreate, ReviewResponse
from kashmir_tours.backend.services.review import ReviewService

router = APIRouter()


@router.post(
    "/tours/{slug}/reviews",
    response_model=ApiResponse[ReviewResponse],
    status_code=201,
    summary="Review a tour",
    description="Requires a completed booking of the tour. One review per user per tour.",
)
async def create_review(
    slug: str,
    data: ReviewCreate,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[ReviewResponse]:
    review = await ReviewService(db).create_review(slug, user, data)
    return ApiResponse(data=ReviewResponse.model_validate(review))


@router.get(
    "/tours/{slug}/reviews",
    summary="List tour reviews (paginated)",
    description="Reviews of a tour, newest first.",
)
async def list_reviews(
    slug: str,
    db: DbSession,
    request_id: RequestId,
    pagination: PaginationParams = Depends(get_pagination_params),
) -> dict[str, Any]:
    reviews, total = await ReviewService(db).list_reviews(
        slug,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return create_paginated_response(
        items=reviews,
        item_schema=ReviewResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.delete(
    "/reviews/{review_id}",
    status_code=204,
    summary="Delete a review",
    description="Author or admin only.",
)
async def delete_review(review_id: str, db: DbSession, user: CurrentUser) -> None:
    await ReviewService(db).delete_review(review_id, user)
