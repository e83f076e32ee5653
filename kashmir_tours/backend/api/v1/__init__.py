"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from kashmir_tours.backend.api.v1.endpoints import (
    admin_bookings,
    auth,
    bookings,
    destinations,
    reviews,
    tours,
)

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(destinations.router, prefix="/destinations", tags=["destinations"])
router.include_router(tours.router, prefix="/tours", tags=["tours"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
router.include_router(admin_bookings.router, prefix="/admin/bookings", tags=["admin"])

# Review routes span /tours/{slug}/reviews and /reviews/{id}
router.include_router(reviews.router, tags=["reviews"])
