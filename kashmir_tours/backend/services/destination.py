"""
Destination Service.

Business logic for the destination catalogue.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.core.exceptions import ConflictError, NotFoundError
from kashmir_tours.backend.core.utils import slugify
from kashmir_tours.backend.models.destination import Destination
from kashmir_tours.backend.repositories.destination import DestinationRepository
from kashmir_tours.backend.schemas.destination import DestinationCreate, DestinationUpdate
from kashmir_tours.backend.services.base import BaseService


class DestinationService(BaseService):
    """Service for destinations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = DestinationRepository(session)

    async def list_destinations(
        self,
        query: str | None = None,
        region: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Destination], int]:
        """
        List active destinations with total count for pagination.

        Returns:
            Tuple of (destinations list, total count)
        """
        destinations = await self.repo.list_active(query=query, region=region, limit=limit, offset=offset)
        total = await self.repo.count_active(query=query, region=region)
        return destinations, total

    async def get_destination(self, slug: str) -> Destination:
        """
        Get an active destination by slug.

        Raises:
            NotFoundError: If missing or deactivated
        """
        destination = await self.repo.get_by_slug(slug)
        if destination is None or not destination.is_active:
            raise NotFoundError("Destination not found")
        return destination

    async def create_destination(self, data: DestinationCreate) -> Destination:
        """
        Create a destination; its slug is derived from the name.

        Raises:
            ConflictError: If the name or slug is already used
        """
        slug = slugify(data.name)
        if await self.repo.name_or_slug_taken(data.name, slug):
            raise ConflictError("Destination already exists")

        self._log_operation("Creating destination", slug=slug)
        return await self._execute_db_operation(
            "create_destination",
            self.repo.create(slug=slug, **data.model_dump()),
        )

    async def update_destination(self, destination_id: str, data: DestinationUpdate) -> Destination:
        """
        Update a destination. Renaming regenerates the slug.

        Raises:
            NotFoundError: If destination not found
            ConflictError: If the new name or slug is already used
        """
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return await self.repo.get_by_id(destination_id)

        if "name" in update_data:
            update_data["slug"] = slugify(update_data["name"])
            if await self.repo.name_or_slug_taken(
                update_data["name"], update_data["slug"], exclude_id=destination_id,
            ):
                raise ConflictError("Destination already exists")

        self._log_operation(
            "Updating destination",
            destination_id=destination_id,
            fields=list(update_data.keys()),
        )
        return await self._execute_db_operation(
            "update_destination",
            self.repo.update(destination_id, **update_data),
        )

    async def deactivate_destination(self, destination_id: str) -> Destination:
        """
        Soft-delete a destination.

        Raises:
            NotFoundError: If destination not found
            ConflictError: If it still has active tours
        """
        destination = await self.repo.get_by_id(destination_id)
        active_tours = await self.repo.count_active_tours(destination.id)
        if active_tours:
            raise ConflictError(
                "Destination still has active tours",
                details={"active_tours": active_tours},
            )

        self._log_operation("Deactivating destination", destination_id=destination_id)
        return await self._execute_db_operation(
            "deactivate_destination",
            self.repo.update(destination_id, is_active=False),
        )
