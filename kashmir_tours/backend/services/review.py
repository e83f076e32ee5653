"""
Review Service.

Tour reviews, restricted to travellers who completed the tour.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.core.config import get_app_config
from kashmir_tours.backend.core.exceptions import AuthorizationError, ConflictError, NotFoundError
from kashmir_tours.backend.models.review import Review
from kashmir_tours.backend.models.tour import Tour
from kashmir_tours.backend.models.user import User
from kashmir_tours.backend.repositories.booking import BookingRepository
from kashmir_tours.backend.repositories.review import ReviewRepository
from kashmir_tours.backend.repositories.tour import TourRepository
from kashmir_tours.backend.schemas.review import ReviewCreate
from kashmir_tours.backend.services.base import BaseService


class ReviewService(BaseService):
    """Service for reviews."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = ReviewRepository(session)
        self.tours = TourRepository(session)
        self.bookings = BookingRepository(session)

    async def create_review(self, tour_slug: str, user: User, data: ReviewCreate) -> Review:
        """
        Review a tour.

        Raises:
            AuthorizationError: Reviews disabled, or no completed booking
            NotFoundError: Tour not found
            ConflictError: The user already reviewed this tour
        """
        if not get_app_config().features.reviews_enabled:
            raise AuthorizationError("Reviews are currently disabled")

        tour = await self._get_tour(tour_slug)
        if not await self.bookings.has_completed_booking(user.id, tour.id):
            raise AuthorizationError("Only travellers who completed this tour can review it")
        if await self.repo.exists_for(user.id, tour.id):
            raise ConflictError("You have already reviewed this tour")

        self._log_operation("Creating review", tour_id=tour.id, user_id=user.id, rating=data.rating)
        return await self._execute_db_operation(
            "create_review",
            self.repo.create(user_id=user.id, tour_id=tour.id, **data.model_dump()),
        )

    async def list_reviews(
        self,
        tour_slug: str,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Review], int]:
        tour = await self._get_tour(tour_slug)
        reviews = await self.repo.list_for_tour(tour.id, limit=limit, offset=offset)
        _, total = await self.repo.rating_summary(tour.id)
        return reviews, total

    async def delete_review(self, review_id: str, actor: User) -> None:
        """
        Delete a review.

        Raises:
            NotFoundError: Review not found
            AuthorizationError: Caller is neither the author nor an admin
        """
        review = await self.repo.get_by_id(review_id)
        if review.user_id != actor.id and not actor.is_admin:
            raise AuthorizationError("You can only delete your own reviews")

        self._log_operation("Deleting review", review_id=review_id, actor_id=actor.id)
        await self._execute_db_operation("delete_review", self.repo.delete(review_id))

    async def _get_tour(self, slug: str) -> Tour:
        tour = await self.tours.get_bookable_by_slug(slug)
        if tour is None:
            raise NotFoundError("Tour not found")
        return tour
