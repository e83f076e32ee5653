"""
Review Repository.

Data access layer for tour reviews and rating aggregates.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.models.review import Review
from kashmir_tours.backend.repositories.base import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    """Repository for Review model."""

    model = Review

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def exists_for(self, user_id: str, tour_id: str) -> bool:
        result = await self.session.execute(
            select(Review.id)
            .where(Review.user_id == user_id)
            .where(Review.tour_id == tour_id)
        )
        return result.scalar_one_or_none() is not None

    async def list_for_tour(self, tour_id: str, limit: int = 20, offset: int = 0) -> list[Review]:
        result = await self.session.execute(
            select(Review)
            .where(Review.tour_id == tour_id)
            .order_by(Review.created_at.desc(), Review.id)
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def rating_summary(self, tour_id: str) -> tuple[float | None, int]:
        """
        Average rating and review count for a tour.

        Returns:
            Tuple of (average or None when there are no reviews, count)
        """
        result = await self.session.execute(
            select(func.avg(Review.rating), func.count(Review.id))
            .where(Review.tour_id == tour_id)
        )
        average, count = result.one()
        return (float(average) if average is not None else None), int(count)
