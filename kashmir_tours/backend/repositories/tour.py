"""
Tour Repository.

Data access layer for tours, including catalogue filtering.
"""

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.models.destination import Destination
from kashmir_tours.backend.models.tour import Tour, TourDifficulty
from kashmir_tours.backend.repositories.base import BaseRepository


@dataclass
class TourFilters:
    """Catalogue filters accepted by the public tour listing."""

    destination_slug: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    max_days: int | None = None
    difficulty: TourDifficulty | None = None
    query: str | None = None


class TourRepository(BaseRepository[Tour]):
    """Repository for Tour model."""

    model = Tour

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    def _catalogue_query(self, filters: TourFilters) -> Select:
        """Active tours whose destination is also active, narrowed by filters."""
        stmt = (
            select(Tour)
            .join(Destination, Destination.id == Tour.destination_id)
            .where(Tour.is_active == True)  # noqa: E712
            .where(Destination.is_active == True)  # noqa: E712
        )
        if filters.destination_slug:
            stmt = stmt.where(Destination.slug == filters.destination_slug)
        if filters.min_price is not None:
            stmt = stmt.where(Tour.price_per_person >= filters.min_price)
        if filters.max_price is not None:
            stmt = stmt.where(Tour.price_per_person <= filters.max_price)
        if filters.max_days is not None:
            stmt = stmt.where(Tour.duration_days <= filters.max_days)
        if filters.difficulty is not None:
            stmt = stmt.where(Tour.difficulty == filters.difficulty)
        if filters.query:
            stmt = stmt.where(Tour.title.ilike(f"%{filters.query}%"))
        return stmt

    async def list_catalogue(
        self,
        filters: TourFilters,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Tour]:
        """List bookable tours ordered by price, then title."""
        result = await self.session.execute(
            self._catalogue_query(filters)
            .order_by(Tour.price_per_person, Tour.title)
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def count_catalogue(self, filters: TourFilters) -> int:
        subquery = self._catalogue_query(filters).subquery()
        result = await self.session.execute(select(func.count()).select_from(subquery))
        return result.scalar_one()

    async def get_by_slug(self, slug: str) -> Tour | None:
        result = await self.session.execute(select(Tour).where(Tour.slug == slug))
        return result.scalar_one_or_none()

    async def get_bookable_by_slug(self, slug: str) -> Tour | None:
        """Get an active tour of an active destination by slug."""
        result = await self.session.execute(
            self._catalogue_query(TourFilters()).where(Tour.slug == slug)
        )
        return result.scalar_one_or_none()

    async def get_for_update(self, tour_id: str) -> Tour | None:
        """
        Load a tour and lock its row until the transaction ends.

        Bookings for the same tour serialize on this lock so that seat
        counting and insertion happen atomically. SQLite ignores the lock;
        it serializes writers on its own.
        """
        result = await self.session.execute(
            select(Tour).where(Tour.id == tour_id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def slug_taken(self, slug: str, exclude_id: str | None = None) -> bool:
        stmt = select(Tour.id).where(Tour.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(Tour.id != exclude_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None
