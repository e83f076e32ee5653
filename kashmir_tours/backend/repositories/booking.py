"""
Booking Repository.

Data access layer for bookings and seat accounting.
"""

from datetime import date

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.models.booking import SEAT_HOLDING_STATUSES, Booking, BookingStatus
from kashmir_tours.backend.repositories.base import BaseRepository


class BookingRepository(BaseRepository[Booking]):
    """Repository for Booking model."""

    model = Booking

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_reference(self, reference: str) -> Booking | None:
        result = await self.session.execute(
            select(Booking).where(Booking.reference == reference.upper())
        )
        return result.scalar_one_or_none()

    async def reference_exists(self, reference: str) -> bool:
        result = await self.session.execute(
            select(Booking.id).where(Booking.reference == reference)
        )
        return result.scalar_one_or_none() is not None

    async def booked_seats(self, tour_id: str, travel_date: date) -> int:
        """Sum of travelers holding seats on a tour for one date."""
        result = await self.session.execute(
            select(func.coalesce(func.sum(Booking.travelers), 0))
            .where(Booking.tour_id == tour_id)
            .where(Booking.travel_date == travel_date)
            .where(Booking.status.in_(SEAT_HOLDING_STATUSES))
        )
        return int(result.scalar_one())

    async def max_booked_seats_from(self, tour_id: str, from_date: date) -> int:
        """Highest seat count held on any single date on or after ``from_date``."""
        per_date = (
            select(func.sum(Booking.travelers).label("seats"))
            .where(Booking.tour_id == tour_id)
            .where(Booking.travel_date >= from_date)
            .where(Booking.status.in_(SEAT_HOLDING_STATUSES))
            .group_by(Booking.travel_date)
            .subquery()
        )
        result = await self.session.execute(
            select(func.coalesce(func.max(per_date.c.seats), 0))
        )
        return int(result.scalar_one())

    async def has_completed_booking(self, user_id: str, tour_id: str) -> bool:
        result = await self.session.execute(
            select(Booking.id)
            .where(Booking.user_id == user_id)
            .where(Booking.tour_id == tour_id)
            .where(Booking.status == BookingStatus.COMPLETED)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    def _filtered(
        self,
        user_id: str | None = None,
        status: BookingStatus | None = None,
        tour_id: str | None = None,
        travel_date: date | None = None,
    ) -> Select:
        stmt = select(Booking)
        if user_id is not None:
            stmt = stmt.where(Booking.user_id == user_id)
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        if tour_id is not None:
            stmt = stmt.where(Booking.tour_id == tour_id)
        if travel_date is not None:
            stmt = stmt.where(Booking.travel_date == travel_date)
        return stmt

    async def list_filtered(
        self,
        limit: int = 20,
        offset: int = 0,
        **filters,
    ) -> list[Booking]:
        """
        List bookings newest first.

        Args:
            limit: Maximum number of bookings to return
            offset: Number of bookings to skip
            **filters: user_id, status, tour_id, travel_date
        """
        result = await self.session.execute(
            self._filtered(**filters)
            .order_by(Booking.created_at.desc(), Booking.reference)
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def count_filtered(self, **filters) -> int:
        subquery = self._filtered(**filters).subquery()
        result = await self.session.execute(select(func.count()).select_from(subquery))
        return result.scalar_one()
