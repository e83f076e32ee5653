"""
Destination Repository.

Data access layer for destinations.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.models.destination import Destination
from kashmir_tours.backend.models.tour import Tour
from kashmir_tours.backend.repositories.base import BaseRepository


class DestinationRepository(BaseRepository[Destination]):
    """Repository for Destination model."""

    model = Destination

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    def _active_query(self, query: str | None, region: str | None):
        stmt = select(Destination).where(Destination.is_active == True)  # noqa: E712
        if query:
            stmt = stmt.where(Destination.name.ilike(f"%{query}%"))
        if region:
            stmt = stmt.where(func.lower(Destination.region) == region.lower())
        return stmt

    async def list_active(
        self,
        query: str | None = None,
        region: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Destination]:
        """
        List active destinations ordered by name.

        Args:
            query: Case-insensitive substring of the name
            region: Exact region, case-insensitive
            limit: Maximum number of destinations to return
            offset: Number of destinations to skip
        """
        result = await self.session.execute(
            self._active_query(query, region)
            .order_by(Destination.name)
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def count_active(self, query: str | None = None, region: str | None = None) -> int:
        """Count active destinations matching the same filters as list_active."""
        subquery = self._active_query(query, region).subquery()
        result = await self.session.execute(select(func.count()).select_from(subquery))
        return result.scalar_one()

    async def get_by_slug(self, slug: str) -> Destination | None:
        result = await self.session.execute(
            select(Destination).where(Destination.slug == slug)
        )
        return result.scalar_one_or_none()

    async def name_or_slug_taken(
        self,
        name: str,
        slug: str,
        exclude_id: str | None = None,
    ) -> bool:
        """Check whether another destination already uses this name or slug."""
        stmt = select(Destination.id).where(
            (func.lower(Destination.name) == name.lower()) | (Destination.slug == slug)
        )
        if exclude_id is not None:
            stmt = stmt.where(Destination.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def count_active_tours(self, destination_id: str) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(Tour)
            .where(Tour.destination_id == destination_id)
            .where(Tour.is_active == True)  # noqa: E712
        )
        return result.scalar_one()
